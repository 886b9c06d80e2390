# main.py

import sys

from docqa.application.corpus_builder import build_corpus
from docqa.application.query_service import QueryService
from docqa.config import DATA_DIRECTORY, DEFAULT_MAX_RESULTS
from docqa.domain.errors import ExtractionError, GenerationError, GenerationFailed
from docqa.infrastructure.document_loader import DocumentLoader
from docqa.infrastructure.gemini_generator import GeminiGenerator
from docqa.interface.cli import (
    display_welcome_banner,
    display_corpus_status,
    prompt_for_query,
    display_answer,
    display_error,
    ask_continue,
)


def main() -> None:
    display_welcome_banner()

    # ── 1. Initialize infrastructure ─────────────────────────────────────────
    try:
        generator = GeminiGenerator()
    except GenerationError as error:
        display_error(error.message)
        sys.exit(1)

    # ── 2. Build the corpus (all-or-nothing) ─────────────────────────────────
    loader = DocumentLoader()
    try:
        document_texts = loader.load_directory(DATA_DIRECTORY)
    except (FileNotFoundError, ExtractionError) as error:
        display_error(str(error))
        sys.exit(1)

    if not document_texts:
        display_error(f"No supported documents found in '{DATA_DIRECTORY}/'.")
        sys.exit(1)

    corpus = build_corpus(document_texts)
    service = QueryService(generator, corpus, default_max_results=DEFAULT_MAX_RESULTS)
    display_corpus_status(len(corpus.documents), corpus.chunk_count)

    # ── 3. Interactive question loop ─────────────────────────────────────────
    while True:
        query = prompt_for_query()
        try:
            result = service.answer(query)
            display_answer(query, result)
        except (ValueError, GenerationFailed) as error:
            display_error(str(error))

        if not ask_continue():
            break


if __name__ == "__main__":
    main()
