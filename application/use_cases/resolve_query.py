"""Use case that resolves a natural-language query into a stored document."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.entities import REFINE_PROMPT_MESSAGE, Query, QueryResponse
from domain.errors import AdapterError, ContentUnavailableError, EmbeddingError, VectorStoreError
from domain.interfaces import ContentLoader, Embedder, QueryResolver, VectorStoreConnector

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolverSettings:
    model: str
    score_threshold: float


class DefaultQueryResolver(QueryResolver):
    """Embed, search, gate on the score threshold, then load the matched document.

    Each step runs once with no retries. Adapter failures become ``KO``
    responses carrying the adapter diagnostic; they are never raised.
    """

    def __init__(
        self,
        *,
        settings: ResolverSettings,
        embedder: Embedder,
        connector: VectorStoreConnector,
        content_loader: ContentLoader,
    ) -> None:
        self._settings = settings
        self._embedder = embedder
        self._connector = connector
        self._content_loader = content_loader

    def resolve(self, query: Query) -> QueryResponse:
        try:
            connection = self._connector.connect()
        except VectorStoreError as exc:
            return self._adapter_failure(exc)

        try:
            try:
                embedding = self._embedder.embed(self._settings.model, query.text)
            except EmbeddingError as exc:
                return self._adapter_failure(exc)

            try:
                match = connection.search(query.category, embedding)
            except VectorStoreError as exc:
                return self._adapter_failure(exc)
        finally:
            connection.close()

        if match.is_empty:
            logger.info("No match in category '%s'", query.category)
            return QueryResponse.failure(REFINE_PROMPT_MESSAGE, query=query.text)

        logger.info("score %s", match.score)
        if not match.score > self._settings.score_threshold:
            logger.debug(
                "Score %s at or below threshold %s", match.score, self._settings.score_threshold
            )
            return QueryResponse.failure(REFINE_PROMPT_MESSAGE, query=query.text)

        try:
            content = self._load(match.document_path)
        except ContentUnavailableError as exc:
            logger.warning("Matched document unavailable: %s (%s)", exc.path, exc.reason)
            return QueryResponse.failure(str(exc), query=query.text)

        return QueryResponse.success(query.text, content, match.score)

    def _load(self, path: str | None) -> str:
        if path is None:
            raise ContentUnavailableError("", "match payload has no document id")
        content = self._content_loader.load(path)
        if not content:
            raise ContentUnavailableError(path, "document is empty")
        return content

    @staticmethod
    def _adapter_failure(exc: AdapterError) -> QueryResponse:
        logger.warning("Adapter failure: %s", exc)
        logger.debug("Adapter failure details", exc_info=exc)
        return QueryResponse.failure(str(exc))


__all__ = ["DefaultQueryResolver", "ResolverSettings"]
