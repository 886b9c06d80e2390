# docqa/infrastructure/chunker.py

import re
import uuid
from typing import List, Tuple

from docqa.config import CHUNK_SIZE, CHUNK_OVERLAP
from docqa.domain.models import Chunk


# Anything outside word chars, whitespace and basic punctuation becomes a space
_SPECIAL_CHARS = re.compile(r"[^\w\s.,!?;:()\-\[\]{}]")
_WHITESPACE = re.compile(r"\s+")
# A sentence ends at a run of terminators followed by whitespace
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+(\s+)")


class SentenceChunker:
    """
    Splits cleaned document text into overlapping chunks of whole sentences.

    Sentences are accumulated greedily until the next one would push the
    chunk past `chunk_size` characters. Each new chunk is seeded with the
    last `chunk_overlap` characters of the previous one, so consecutive
    chunks share context. A sentence is never cut: one longer than
    `chunk_size` becomes a chunk on its own.

    Chunk text is always `clean_text(document)[chunk.start:chunk.end]`.
    """

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def chunk(self, text: str, document_id: str) -> List[Chunk]:
        cleaned = self.clean_text(text)
        chunks: List[Chunk] = []

        buffer_start = buffer_end = 0
        buffer_empty = True

        for sentence_start, sentence_end in self.sentence_spans(cleaned):
            buffer_length = buffer_end - buffer_start
            sentence_length = sentence_end - sentence_start

            if not buffer_empty and buffer_length + sentence_length > self._chunk_size:
                chunks.append(self._make_chunk(cleaned, buffer_start, buffer_end, document_id))
                # Seed the next buffer with the tail of the closed one
                buffer_start = max(buffer_start, buffer_end - self._chunk_overlap)
            elif buffer_empty:
                buffer_start = sentence_start

            buffer_end = sentence_end
            buffer_empty = False

        if not buffer_empty:
            chunks.append(self._make_chunk(cleaned, buffer_start, buffer_end, document_id))

        return chunks

    # ─── Text Processing ──────────────────────────────────────────────────────

    @staticmethod
    def clean_text(text: str) -> str:
        """Drop unsupported characters and collapse whitespace to single spaces."""
        text = _SPECIAL_CHARS.sub(" ", text)
        text = _WHITESPACE.sub(" ", text)
        return text.strip()

    @staticmethod
    def sentence_spans(cleaned: str) -> List[Tuple[int, int]]:
        """
        Return (start, end) offsets of each sentence, terminators included.
        Cheap heuristic, not real sentence parsing.
        """
        spans = []
        start = 0
        for match in _SENTENCE_BOUNDARY.finditer(cleaned):
            spans.append((start, match.start(1)))
            start = match.end()
        if start < len(cleaned):
            spans.append((start, len(cleaned)))
        return spans

    @staticmethod
    def _make_chunk(cleaned: str, start: int, end: int, document_id: str) -> Chunk:
        # An overlap seed may begin on the separating space
        while start < end and cleaned[start].isspace():
            start += 1
        return Chunk(
            chunk_id=str(uuid.uuid4()),
            document_id=document_id,
            text=cleaned[start:end],
            start=start,
            end=end,
        )
