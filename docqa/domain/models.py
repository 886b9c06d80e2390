# docqa/domain/models.py

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
import numpy as np


@dataclass(frozen=True)
class Chunk:
    """
    A bounded, overlapping span of a document's cleaned text.
    The unit of retrieval. `start`/`end` are half-open character offsets.
    """
    chunk_id: str
    document_id: str
    text: str
    start: int
    end: int
    embedding: Optional[np.ndarray] = field(default=None, repr=False, compare=False)

    def with_embedding(self, embedding: np.ndarray) -> "Chunk":
        return replace(self, embedding=embedding)


@dataclass(frozen=True)
class Document:
    """
    A source document and its ordered chunks.
    """
    document_id: str
    name: str
    text: str
    chunks: Tuple[Chunk, ...] = ()


@dataclass(frozen=True)
class Vocabulary:
    """
    Term index + IDF weights for one corpus generation.

    `term_index` only holds the most frequent terms; `idf` holds every term
    seen in any chunk. Both are read-only views.
    """
    term_index: Mapping[str, int]
    idf: Mapping[str, float]
    dimension: int

    def __post_init__(self):
        object.__setattr__(self, "term_index", MappingProxyType(dict(self.term_index)))
        object.__setattr__(self, "idf", MappingProxyType(dict(self.idf)))

    def __len__(self) -> int:
        return len(self.term_index)


@dataclass
class SearchResult:
    """
    Represents a ranked search result.
    """
    chunk: Chunk
    similarity_score: float

    def __repr__(self) -> str:
        preview = self.chunk.text[:80].replace("\n", " ")
        return (
            f"SearchResult(score={self.similarity_score:.4f}, "
            f"document_id='{self.chunk.document_id}', "
            f"preview='{preview}...')"
        )


@dataclass(frozen=True)
class Citation:
    document_name: str
    excerpt: str
    score: float

    def to_dict(self) -> dict:
        return {
            "document": self.document_name,
            "text_excerpt": self.excerpt,
            "confidence_score": round(float(self.score), 4),
        }


@dataclass
class QueryAnswer:
    """
    Generated answer returned to the caller, with the citations it was built from.
    """
    answer: str
    citations: List[Citation] = field(default_factory=list)
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict:
        return {
            "status": "success",
            "response": self.answer,
            "citations": [c.to_dict() for c in self.citations],
            "processing_time_ms": int(round(self.elapsed_ms)),
        }
