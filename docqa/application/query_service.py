# docqa/application/query_service.py

import time
from typing import List, Optional

from docqa.application.corpus_builder import Corpus
from docqa.application.prompts import build_context, build_prompt
from docqa.config import DEFAULT_MAX_RESULTS, EXCERPT_LENGTH
from docqa.domain.errors import GenerationError, GenerationFailed
from docqa.domain.interfaces import GeneratorPort
from docqa.domain.models import Citation, QueryAnswer, SearchResult


class QueryService:
    """
    Core use case: answer a natural language question from the corpus.

    Pipeline per call:
        vectorize query → top-k chunks → generator(prompt) → citations

    The corpus is an immutable snapshot. replace_corpus() swaps the whole
    reference; each call reads it once, so an in-flight query never sees a
    mix of two generations.
    """

    def __init__(
        self,
        generator: GeneratorPort,
        corpus: Corpus,
        default_max_results: int = DEFAULT_MAX_RESULTS,
    ):
        self._generator = generator
        self._corpus = corpus
        self._default_max_results = default_max_results

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    def replace_corpus(self, corpus: Corpus) -> None:
        self._corpus = corpus

    def search(
        self,
        query: str,
        top_k: Optional[int] = None,
        corpus: Optional[Corpus] = None,
    ) -> List[SearchResult]:
        corpus = corpus or self._corpus
        top_k = self._default_max_results if top_k is None else top_k

        query_embedding = corpus.engine.encode_single(query)
        return corpus.store.search(query_embedding=query_embedding, top_k=top_k)

    def answer(self, query: str, max_results: Optional[int] = None) -> QueryAnswer:
        query = query.strip()
        if not query:
            raise ValueError("Query cannot be empty.")

        corpus = self._corpus
        started = time.perf_counter()

        results = self.search(query, max_results, corpus=corpus)
        if corpus.chunk_count == 0:
            print("[QueryService] Corpus is empty, generating without context.")

        passages = []
        for result in results:
            document = corpus.document_for_chunk(result.chunk.chunk_id)
            if document is not None:
                passages.append((document.name, result.chunk.text))

        prompt = build_prompt(query, build_context(passages))
        try:
            answer_text = self._generator.generate(prompt)
        except GenerationError as error:
            raise GenerationFailed(error.message) from error

        citations = self._build_citations(results, corpus)
        elapsed_ms = (time.perf_counter() - started) * 1000

        print(f"[QueryService] {len(results)} chunks, {len(citations)} citations, "
              f"{elapsed_ms:.1f} ms")
        return QueryAnswer(answer=answer_text, citations=citations, elapsed_ms=elapsed_ms)

    @staticmethod
    def _build_citations(results: List[SearchResult], corpus: Corpus) -> List[Citation]:
        citations = []
        for result in results:
            document = corpus.document_for_chunk(result.chunk.chunk_id)
            if document is None:
                continue
            citations.append(Citation(
                document_name=document.name,
                excerpt=make_excerpt(result.chunk.text),
                score=result.similarity_score,
            ))
        return citations


def make_excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    if len(text) > length:
        return text[:length] + "..."
    return text
