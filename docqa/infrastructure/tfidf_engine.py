# docqa/infrastructure/tfidf_engine.py
# TF-IDF vectors over a corpus-wide vocabulary. No model download, no state
# beyond the Vocabulary snapshot the engine is built with.

import math
from collections import Counter
from typing import Iterable, List

import numpy as np

from docqa.config import MAX_VOCABULARY_SIZE, MIN_EMBEDDING_DIMENSION, MIN_TOKEN_LENGTH
from docqa.domain.interfaces import EmbeddingPort
from docqa.domain.models import Vocabulary


def tokenize(text: str) -> List[str]:
    """Lowercase, split on whitespace, keep alphanumerics, drop short tokens."""
    tokens = []
    for word in text.lower().split():
        token = "".join(ch for ch in word if ch.isalnum())
        if len(token) >= MIN_TOKEN_LENGTH:
            tokens.append(token)
    return tokens


def build_vocabulary(
    texts: Iterable[str],
    max_size: int = MAX_VOCABULARY_SIZE,
    min_dimension: int = MIN_EMBEDDING_DIMENSION,
) -> Vocabulary:
    """
    Single pass over every chunk text of the corpus.

    - idf(term) = ln(total_chunks / chunks_containing(term)), for every term
    - term_index keeps the `max_size` most frequent terms, ranked by total
      occurrences; equal counts keep first-seen order
    """
    term_counts: Counter = Counter()
    document_frequencies: Counter = Counter()
    total_chunks = 0

    for text in texts:
        tokens = tokenize(text)
        term_counts.update(tokens)
        document_frequencies.update(set(tokens))
        total_chunks += 1

    idf = {
        term: math.log(total_chunks / df)
        for term, df in document_frequencies.items()
    }

    # sorted() is stable, so ties stay in Counter insertion order
    ranked = sorted(term_counts.items(), key=lambda item: item[1], reverse=True)
    term_index = {term: idx for idx, (term, _) in enumerate(ranked[:max_size])}

    return Vocabulary(
        term_index=term_index,
        idf=idf,
        dimension=max(len(term_index), min_dimension),
    )


class TfidfEmbeddingEngine(EmbeddingPort):
    """
    Embeds text against a fixed Vocabulary.

    Chunks and queries must be encoded by engines sharing the same
    Vocabulary, otherwise their vectors live in different spaces.
    """

    def __init__(self, vocabulary: Vocabulary):
        self._vocabulary = vocabulary

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    @property
    def dimension(self) -> int:
        return self._vocabulary.dimension

    def encode(self, texts: List[str]) -> np.ndarray:
        if not texts:
            return np.zeros((0, self.dimension), dtype=np.float32)
        return np.stack([self.encode_single(text) for text in texts])

    def encode_single(self, text: str) -> np.ndarray:
        embedding = np.zeros(self.dimension, dtype=np.float32)
        tokens = tokenize(text)
        if not tokens:
            return embedding

        total_tokens = len(tokens)
        term_index = self._vocabulary.term_index
        idf = self._vocabulary.idf

        for term, count in Counter(tokens).items():
            idx = term_index.get(term)
            # Out-of-vocabulary or out-of-range terms contribute nothing
            if idx is None or idx >= self.dimension:
                continue
            embedding[idx] = (count / total_tokens) * idf.get(term, 1.0)

        norm = float(np.linalg.norm(embedding))
        if norm > 0.0:
            embedding /= norm
        return embedding
