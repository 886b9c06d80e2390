# docqa/infrastructure/vector_store.py

import numpy as np
from typing import List

from docqa.domain.interfaces import VectorStorePort
from docqa.domain.models import Chunk, SearchResult


class InMemoryVectorStore(VectorStorePort):
    """
    Brute-force, exact cosine similarity over every indexed chunk.

    Ranking is a stable descending sort on score: equal scores keep the
    order in which chunks were indexed (document order, then position
    within the document).
    """

    def __init__(self):
        self._chunks: List[Chunk] = []
        self._embedding_matrix: np.ndarray | None = None

    def index_chunks(self, chunks: List[Chunk]) -> None:
        # Chunks without an embedding are left out of scoring entirely
        embedded = [c for c in chunks if c.embedding is not None]
        skipped = len(chunks) - len(embedded)
        if skipped:
            print(f"[VectorStore] Skipped {skipped} chunks without embeddings.")

        dimensions = {len(c.embedding) for c in embedded}
        if len(dimensions) > 1:
            raise ValueError(f"Chunk embeddings have mixed dimensions: {sorted(dimensions)}")

        self._chunks = embedded
        if embedded:
            self._embedding_matrix = np.stack([c.embedding for c in embedded]).astype(np.float32)
        else:
            self._embedding_matrix = np.zeros((0, 0), dtype=np.float32)
        print(f"[VectorStore] Indexed {len(embedded)} chunks. "
              f"Matrix shape: {self._embedding_matrix.shape}")

    def is_ready(self) -> bool:
        """Ready once index_chunks() has run, even for an empty corpus."""
        return self._embedding_matrix is not None

    def __len__(self) -> int:
        return len(self._chunks)

    def get_document_stats(self) -> List[dict]:
        counts = {}
        for c in self._chunks:
            counts[c.document_id] = counts.get(c.document_id, 0) + 1
        return [{"document_id": doc_id, "count": count} for doc_id, count in counts.items()]

    def search(
        self,
        query_embedding: np.ndarray,
        top_k: int,
    ) -> List[SearchResult]:
        if self._embedding_matrix is None:
            raise RuntimeError("Vector store is empty. Call index_chunks() first.")

        if top_k <= 0 or not self._chunks:
            return []

        scores = self.cosine_scores(query_embedding)
        # Stable sort keeps indexing order among equal scores
        order = np.argsort(-scores, kind="stable")[:top_k]

        return [
            SearchResult(chunk=self._chunks[i], similarity_score=float(scores[i]))
            for i in order
        ]

    def cosine_scores(self, query_embedding: np.ndarray) -> np.ndarray:
        """
        Cosine similarity of the query against every chunk, computed over the
        shared prefix of the two vectors. Zero when either side has zero norm.
        """
        query = np.asarray(query_embedding, dtype=np.float32).ravel()
        shared = min(self._embedding_matrix.shape[1], query.shape[0])

        matrix = self._embedding_matrix[:, :shared]
        query = query[:shared]

        dots = matrix @ query
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)

        scores = np.zeros(len(self._chunks), dtype=np.float32)
        nonzero = norms > 0
        scores[nonzero] = dots[nonzero] / norms[nonzero]
        return scores
