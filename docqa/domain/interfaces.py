# docqa/domain/interfaces.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union
import numpy as np

from .models import Chunk, SearchResult


class EmbeddingPort(ABC):
    """
    Port for any embedding engine.
    Intentionally minimal. The vector space is fixed by the engine instance.
    """

    @abstractmethod
    def encode(self, texts: List[str]) -> np.ndarray: ...

    @abstractmethod
    def encode_single(self, text: str) -> np.ndarray: ...


class VectorStorePort(ABC):

    @abstractmethod
    def index_chunks(self, chunks: List[Chunk]) -> None: ...

    @abstractmethod
    def search(
        self,
        query_embedding: np.ndarray,
        top_k: int,
    ) -> List[SearchResult]: ...

    @abstractmethod
    def is_ready(self) -> bool: ...

    @abstractmethod
    def get_document_stats(self) -> List[dict]:
        """
        Return a list of indexed document ids with their chunk counts.
        """
        ...


class TextExtractorPort(ABC):

    @abstractmethod
    def extract_text(self, source: Union[str, Path, bytes]) -> str:
        """
        Return the UTF-8 text of a document.
        Raises ExtractionError on malformed or unsupported input.
        """
        ...


class GeneratorPort(ABC):

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """
        Return the generated answer for a prompt.
        Raises GenerationError on transport failure or non-success status.
        """
        ...
