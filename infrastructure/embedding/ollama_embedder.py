"""Embedder backed by the Ollama HTTP API."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from domain.errors import EmbeddingError
from domain.interfaces import Embedder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OllamaEmbedderConfig:
    base_url: str = "http://localhost:11434"
    timeout: float = 30.0


class OllamaEmbedder(Embedder):
    """Generate query embeddings through ``POST /api/embeddings``."""

    def __init__(self, config: OllamaEmbedderConfig) -> None:
        self._config = config

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/api/embeddings"

    def embed(self, model: str, text: str) -> list[float]:
        logger.debug("ollama connection %s (model=%s)", self.endpoint, model)
        try:
            response = requests.post(
                self.endpoint,
                json={"model": model, "prompt": text},
                timeout=self._config.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise EmbeddingError(str(exc)) from exc
        except ValueError as exc:
            raise EmbeddingError(f"invalid response body: {exc}") from exc

        embedding = payload.get("embedding") if isinstance(payload, dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise EmbeddingError("response did not contain an embedding")
        try:
            return [float(value) for value in embedding]
        except (TypeError, ValueError) as exc:
            raise EmbeddingError(f"non-numeric embedding: {exc}") from exc


__all__ = ["OllamaEmbedder", "OllamaEmbedderConfig"]
