"""
Port (interface) for the research-document index.
Infrastructure adapters (e.g. FAISSVectorStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.document_chunk import DocumentChunk


class IVectorStore(ABC):
    @abstractmethod
    def add_documents(self, chunks: list[DocumentChunk]) -> None:
        """Embed and index a list of document chunks."""
        ...

    @abstractmethod
    def persist(self, path: str) -> None:
        """Save the index to disk."""
        ...

    @abstractmethod
    def similarity_search(
        self, query: str, k: int = 5, market: Optional[str] = None
    ) -> list[DocumentChunk]:
        """Return the k chunks closest to *query*.

        With *market* set, only chunks tagged with that market or untagged
        chunks are considered.
        """
        ...

    @classmethod
    @abstractmethod
    def load(cls, path: str) -> "IVectorStore":
        """Reconstruct the index from a persisted path."""
        ...
