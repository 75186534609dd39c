"""Configuration and dependency wiring for the document query service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, TypeVar

from application.use_cases.resolve_query import DefaultQueryResolver, ResolverSettings
from domain.errors import ConfigurationError
from domain.interfaces import ContentLoader, Embedder, QueryResolver, VectorStoreConnector
from infrastructure.content.file_content_loader import FileContentLoader
from infrastructure.embedding.ollama_embedder import OllamaEmbedder, OllamaEmbedderConfig
from infrastructure.storage.qdrant_vector_search import QdrantConfig, QdrantConnector

ENV_PREFIX = "DOCQUERY_"

CategorySource = Literal["config", "request"]
_CATEGORY_SOURCES: tuple[str, ...] = ("config", "request")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

T = TypeVar("T")


@dataclass(slots=True)
class ServiceConfig:
    """Runtime settings, normally read from ``DOCQUERY_*`` environment variables."""

    ollama_url: str = "http://localhost"
    ollama_port: int = 11434
    model: str = "nomic-embed-text"
    qdrant_url: str = "http://localhost"
    qdrant_port: int = 6333
    category: str = "docs"
    score_threshold: float = 0.75
    embedding_timeout: float = 30.0
    search_timeout: float = 10.0
    max_body_bytes: int = 64 * 1024
    category_source: CategorySource = "config"
    legacy_isalive_status: bool = False
    documents_root: str | None = None
    host: str = "0.0.0.0"
    port: int = 8080

    def __post_init__(self) -> None:
        if self.category_source not in _CATEGORY_SOURCES:
            raise ConfigurationError(
                "category_source", self.category_source, f"expected one of {', '.join(_CATEGORY_SOURCES)}"
            )
        for name in ("embedding_timeout", "search_timeout", "max_body_bytes"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(name, getattr(self, name), "must be positive")

    @property
    def ollama_endpoint(self) -> str:
        return f"{self.ollama_url.rstrip('/')}:{self.ollama_port}"

    @property
    def qdrant_endpoint(self) -> str:
        return f"{self.qdrant_url.rstrip('/')}:{self.qdrant_port}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        env = os.environ if environ is None else environ
        defaults = cls()

        def read(name: str, parse: Callable[[str], T], default: T) -> T:
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw.strip() == "":
                return default
            try:
                return parse(raw.strip())
            except ValueError as exc:
                raise ConfigurationError(name, raw, str(exc)) from exc

        return cls(
            ollama_url=read("ollama_url", str, defaults.ollama_url),
            ollama_port=read("ollama_port", int, defaults.ollama_port),
            model=read("model", str, defaults.model),
            qdrant_url=read("qdrant_url", str, defaults.qdrant_url),
            qdrant_port=read("qdrant_port", int, defaults.qdrant_port),
            category=read("category", str, defaults.category),
            score_threshold=read("score_threshold", float, defaults.score_threshold),
            embedding_timeout=read("embedding_timeout", float, defaults.embedding_timeout),
            search_timeout=read("search_timeout", float, defaults.search_timeout),
            max_body_bytes=read("max_body_bytes", int, defaults.max_body_bytes),
            category_source=read("category_source", str.lower, defaults.category_source),
            legacy_isalive_status=read("legacy_isalive_status", _parse_bool, defaults.legacy_isalive_status),
            documents_root=read("documents_root", str, defaults.documents_root),
            host=read("host", str, defaults.host),
            port=read("port", int, defaults.port),
        )


def _parse_bool(raw: str) -> bool:
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    config: ServiceConfig
    embedder: Embedder
    connector: VectorStoreConnector
    content_loader: ContentLoader
    resolver: QueryResolver


def build_default_container(config: ServiceConfig | None = None) -> Container:
    """Instantiate the Ollama/Qdrant/filesystem stack."""

    cfg = config or ServiceConfig.from_env()
    embedder = OllamaEmbedder(OllamaEmbedderConfig(base_url=cfg.ollama_endpoint, timeout=cfg.embedding_timeout))
    connector = QdrantConnector(QdrantConfig(url=cfg.qdrant_url, port=cfg.qdrant_port, timeout=cfg.search_timeout))
    content_loader = FileContentLoader(root=cfg.documents_root)
    resolver = DefaultQueryResolver(
        settings=ResolverSettings(model=cfg.model, score_threshold=cfg.score_threshold),
        embedder=embedder,
        connector=connector,
        content_loader=content_loader,
    )
    return Container(
        config=cfg,
        embedder=embedder,
        connector=connector,
        content_loader=content_loader,
        resolver=resolver,
    )


__all__ = ["Container", "ServiceConfig", "build_default_container", "ENV_PREFIX"]
