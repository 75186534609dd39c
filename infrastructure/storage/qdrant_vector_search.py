"""Qdrant-backed vector search with per-request connections."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from qdrant_client import QdrantClient

from domain.entities import SearchMatch
from domain.errors import VectorStoreError
from domain.interfaces import VectorSearch, VectorStoreConnector

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QdrantConfig:
    url: str = "http://localhost"
    port: int = 6333
    timeout: float = 10.0


class QdrantVectorSearch(VectorSearch):
    """Searches the collection named after the category for its single best point."""

    def __init__(self, client: QdrantClient) -> None:
        self._client = client

    def search(self, category: str, embedding: Sequence[float]) -> SearchMatch:
        try:
            response = self._client.query_points(
                collection_name=category,
                query=list(embedding),
                limit=1,
                with_payload=True,
            )
        except Exception as exc:  # qdrant-client surfaces transport and API errors with several types
            raise VectorStoreError(str(exc) or type(exc).__name__) from exc

        if not response.points:
            return SearchMatch()
        point = response.points[0]
        return SearchMatch(score=float(point.score), payload=dict(point.payload or {}))

    def close(self) -> None:
        self._client.close()


class QdrantConnector(VectorStoreConnector):
    """Builds a fresh ``QdrantClient`` for every query."""

    def __init__(self, config: QdrantConfig) -> None:
        self._config = config

    def connect(self) -> QdrantVectorSearch:
        try:
            client = QdrantClient(
                url=self._config.url,
                port=self._config.port,
                timeout=self._config.timeout,
            )
        except Exception as exc:  # malformed url/port and client construction errors
            raise VectorStoreError(str(exc) or type(exc).__name__) from exc
        logger.debug("qdrant connection %s:%s", self._config.url, self._config.port)
        return QdrantVectorSearch(client)


__all__ = ["QdrantConfig", "QdrantConnector", "QdrantVectorSearch"]
