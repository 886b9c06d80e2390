# docqa/application/corpus_builder.py

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from docqa.domain.interfaces import EmbeddingPort, VectorStorePort
from docqa.domain.models import Chunk, Document, Vocabulary
from docqa.infrastructure.chunker import SentenceChunker
from docqa.infrastructure.tfidf_engine import TfidfEmbeddingEngine, build_vocabulary
from docqa.infrastructure.vector_store import InMemoryVectorStore


@dataclass(frozen=True)
class Corpus:
    """
    Immutable snapshot of one corpus generation: documents, the vocabulary
    that defines the vector space, the engine bound to it and the index.

    Shared by reference between concurrent queries. A rebuild produces a new
    Corpus; nothing here is mutated after build_corpus() returns.
    """
    documents: Tuple[Document, ...]
    vocabulary: Vocabulary
    engine: EmbeddingPort
    store: VectorStorePort
    _documents_by_chunk: Mapping[str, Document] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lookup = {
            chunk.chunk_id: document
            for document in self.documents
            for chunk in document.chunks
        }
        object.__setattr__(self, "_documents_by_chunk", MappingProxyType(lookup))

    @classmethod
    def empty(cls) -> "Corpus":
        return build_corpus({})

    @property
    def chunk_count(self) -> int:
        return len(self._documents_by_chunk)

    def document_for_chunk(self, chunk_id: str) -> Optional[Document]:
        return self._documents_by_chunk.get(chunk_id)

    def get_document_stats(self) -> List[dict]:
        """Indexed chunk counts per document, keyed by filename."""
        counts = {
            stats["document_id"]: stats["count"]
            for stats in self.store.get_document_stats()
        }
        return [
            {"filename": document.name, "chunk_count": counts.get(document.document_id, 0)}
            for document in self.documents
        ]


def build_corpus(
    document_texts: Dict[str, str],
    chunker: Optional[SentenceChunker] = None,
) -> Corpus:
    """
    Batch build, in two phases:
      1. chunk every document (chunks have no embedding yet)
      2. build the vocabulary over all chunks, then re-create every chunk
         with its embedding attached and index them
    """
    chunker = chunker or SentenceChunker()

    # ── Phase 1: documents + bare chunks ─────────────────────────────────────
    drafts: List[Tuple[str, str, str, List[Chunk]]] = []
    for name, text in document_texts.items():
        document_id = str(uuid.uuid4())
        chunks = chunker.chunk(text, document_id)
        drafts.append((document_id, name, text, chunks))
        print(f"[CorpusBuilder] {name}: {len(chunks)} chunks")

    all_chunks = [chunk for *_, chunks in drafts for chunk in chunks]

    # ── Phase 2: vocabulary, embeddings, index ───────────────────────────────
    vocabulary = build_vocabulary(chunk.text for chunk in all_chunks)
    engine = TfidfEmbeddingEngine(vocabulary)
    print(f"[CorpusBuilder] Vocabulary: {len(vocabulary)} terms, "
          f"{len(vocabulary.idf)} IDF entries, dimension {vocabulary.dimension}")

    embeddings = engine.encode([chunk.text for chunk in all_chunks])
    embedded = iter(
        chunk.with_embedding(embedding)
        for chunk, embedding in zip(all_chunks, embeddings)
    )

    documents = tuple(
        Document(
            document_id=document_id,
            name=name,
            text=text,
            chunks=tuple(next(embedded) for _ in chunks),
        )
        for document_id, name, text, chunks in drafts
    )

    store = InMemoryVectorStore()
    store.index_chunks([chunk for document in documents for chunk in document.chunks])

    return Corpus(documents=documents, vocabulary=vocabulary, engine=engine, store=store)
