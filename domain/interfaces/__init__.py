"""Abstract interfaces for the document query service."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities import Query, QueryResponse, SearchMatch


class Embedder(ABC):
    """Turns query text into a vector embedding."""

    @abstractmethod
    def embed(self, model: str, text: str) -> list[float]:
        """Embed ``text`` with ``model``; raise ``EmbeddingError`` on failure."""


class VectorSearch(ABC):
    """An open connection to a vector store."""

    @abstractmethod
    def search(self, category: str, embedding: Sequence[float]) -> SearchMatch:
        """Return the single best match in ``category`` or an empty match.

        Raises ``VectorStoreError`` when the search call fails.
        """

    def close(self) -> None:
        """Release the underlying connection."""


class VectorStoreConnector(ABC):
    """Builds vector store connections; construction itself may fail."""

    @abstractmethod
    def connect(self) -> VectorSearch:
        """Return a ready connection or raise ``VectorStoreError``."""


class ContentLoader(ABC):
    """Loads the document content a search match points at."""

    @abstractmethod
    def load(self, path: str) -> str:
        """Return the full content at ``path`` or raise ``ContentUnavailableError``."""


class QueryResolver(ABC):
    """Resolves a query into a uniform OK/KO response."""

    @abstractmethod
    def resolve(self, query: Query) -> QueryResponse:
        """Run the query pipeline; never raises for adapter or content failures."""


__all__ = [
    "Embedder",
    "VectorSearch",
    "VectorStoreConnector",
    "ContentLoader",
    "QueryResolver",
]
