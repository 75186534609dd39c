"""Domain entities for the document query service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STATUS_OK = "OK"
STATUS_KO = "KO"

NO_SCORE = str(0.0)

REFINE_PROMPT_MESSAGE = "I could not find any related info, please refine your prompt"
LIVENESS_MESSAGE = "service is up"
BODY_TOO_BIG_MESSAGE = "body too big"
CATCH_ALL_MESSAGE = "ensure you post to the /query endpoint with valid json"


@dataclass(frozen=True, slots=True)
class Query:
    """A user query together with the category it is resolved in."""

    text: str
    category: str


@dataclass(slots=True)
class SearchMatch:
    """Best match returned by the vector store; an empty payload means no match."""

    score: float = 0.0
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.payload

    @property
    def document_path(self) -> str | None:
        value = self.payload.get("id")
        if isinstance(value, str) and value:
            return value
        return None


@dataclass(slots=True)
class QueryResponse:
    """Uniform result shape returned to HTTP callers."""

    status: str
    query: str | None
    data: str
    score: str = NO_SCORE

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def success(cls, query: str, data: str, score: float) -> QueryResponse:
        return cls(status=STATUS_OK, query=query, data=data, score=str(score))

    @classmethod
    def failure(cls, data: str, query: str | None = None) -> QueryResponse:
        return cls(status=STATUS_KO, query=query, data=data, score=NO_SCORE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "query": self.query,
            "data": self.data,
            "score": self.score,
        }


__all__ = [
    "Query",
    "SearchMatch",
    "QueryResponse",
    "STATUS_OK",
    "STATUS_KO",
    "NO_SCORE",
    "REFINE_PROMPT_MESSAGE",
    "LIVENESS_MESSAGE",
    "BODY_TOO_BIG_MESSAGE",
    "CATCH_ALL_MESSAGE",
]
