"""
Exceptions raised across the query service.

Every failure maps onto one closed ``ErrorKind`` so the HTTP layer can turn it
into an explicit status code and ``KO`` body instead of aborting the request.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    BODY_TOO_LARGE = "body_too_large"
    INVALID_JSON = "invalid_json"
    ADAPTER_FAILURE = "adapter_failure"
    CONTENT_UNAVAILABLE = "content_unavailable"


class QueryServiceError(Exception):
    """Base exception for all query service errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class AdapterError(QueryServiceError):
    """Raised when an external collaborator (embedding service, vector store) fails."""

    kind = ErrorKind.ADAPTER_FAILURE
    service = "adapter"

    def __init__(self, reason: str, details: Optional[Any] = None):
        self.reason = reason
        message = f"{self.service} {reason}"
        super().__init__(message, details)


class EmbeddingError(AdapterError):
    """Raised when the embedding service cannot produce a vector."""

    service = "ollama"


class VectorStoreError(AdapterError):
    """Raised when the vector store cannot be reached or searched."""

    service = "qdrant"


class ContentUnavailableError(QueryServiceError):
    """Raised when a matched document cannot be loaded."""

    kind = ErrorKind.CONTENT_UNAVAILABLE

    def __init__(self, path: str, reason: str, details: Optional[Any] = None):
        self.path = path
        self.reason = reason
        message = f"content {reason}"
        super().__init__(message, details)


class RequestRejected(QueryServiceError):
    """Raised by the router when an incoming request cannot be accepted."""

    def __init__(self, kind: ErrorKind, message: str, details: Optional[Any] = None):
        self.kind = kind
        super().__init__(message, details)


class ConfigurationError(QueryServiceError):
    """Raised when service configuration is malformed."""

    def __init__(self, field: str, value: Any, reason: str, details: Optional[Any] = None):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Invalid configuration for '{field}' ({value!r}): {reason}"
        super().__init__(message, details)


__all__ = [
    "ErrorKind",
    "QueryServiceError",
    "AdapterError",
    "EmbeddingError",
    "VectorStoreError",
    "ContentUnavailableError",
    "RequestRejected",
    "ConfigurationError",
]
