"""FastAPI layer that exposes the query pipeline and a liveness check."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from domain.entities import (
    BODY_TOO_BIG_MESSAGE,
    CATCH_ALL_MESSAGE,
    LIVENESS_MESSAGE,
    STATUS_OK,
    Query,
    QueryResponse,
)
from domain.errors import ErrorKind, QueryServiceError, RequestRejected
from domain.interfaces import QueryResolver
from infrastructure.config import ServiceConfig, build_default_container

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
INTERNAL_ERROR_MESSAGE = "internal error while processing the request"

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BODY_TOO_LARGE: 413,
    ErrorKind.INVALID_JSON: 400,
    ErrorKind.ADAPTER_FAILURE: 500,
    ErrorKind.CONTENT_UNAVAILABLE: 500,
}


class QueryPayload(BaseModel):
    category: str
    query: str = Field(min_length=1)


class ResponseDetails(BaseModel):
    status: str
    query: str | None = None
    data: str
    score: str

    @classmethod
    def from_domain(cls, response: QueryResponse) -> ResponseDetails:
        return cls(**response.to_dict())


def _respond(response: QueryResponse, status_code: int) -> JSONResponse:
    return JSONResponse(ResponseDetails.from_domain(response).model_dump(), status_code=status_code)


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


async def _read_payload(request: Request, max_body_bytes: int) -> QueryPayload:
    declared = _declared_length(request)
    # No declared length means the size hint has no upper bound.
    if declared is None or declared > max_body_bytes:
        raise RequestRejected(ErrorKind.BODY_TOO_LARGE, BODY_TOO_BIG_MESSAGE, details=declared)

    body = await request.body()
    if len(body) > max_body_bytes:
        raise RequestRejected(ErrorKind.BODY_TOO_LARGE, BODY_TOO_BIG_MESSAGE, details=len(body))
    logger.info("payload received (%d bytes)", len(body))

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RequestRejected(ErrorKind.INVALID_JSON, f"invalid json payload: {exc.reason}") from exc
    try:
        return QueryPayload.model_validate_json(text)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in exc.errors()
        )
        raise RequestRejected(ErrorKind.INVALID_JSON, f"invalid json payload: {reasons}") from exc


def create_app(config: ServiceConfig | None = None, resolver: QueryResolver | None = None) -> FastAPI:
    """Build the HTTP router around ``resolver`` (the default Ollama/Qdrant stack if omitted)."""

    cfg = config or ServiceConfig.from_env()
    if resolver is None:
        resolver = build_default_container(cfg).resolver

    app = FastAPI(title="DocQuery API", docs_url=None, redoc_url=None, openapi_url=None)

    @app.exception_handler(QueryServiceError)
    async def service_error_handler(request: Request, exc: QueryServiceError) -> JSONResponse:
        status_code = _STATUS_BY_KIND.get(exc.kind, 500)
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _respond(QueryResponse.failure(exc.message), status_code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        return _respond(QueryResponse.failure(INTERNAL_ERROR_MESSAGE), 500)

    @app.post("/query")
    async def query_endpoint(request: Request) -> JSONResponse:
        payload = await _read_payload(request, cfg.max_body_bytes)
        category = payload.category if cfg.category_source == "request" else cfg.category
        query = Query(text=payload.query, category=category)
        response = await run_in_threadpool(resolver.resolve, query)
        return _respond(response, 200 if response.ok else 500)

    @app.get("/isalive")
    def isalive_endpoint() -> JSONResponse:
        response = QueryResponse(status=STATUS_OK, query=None, data=LIVENESS_MESSAGE)
        return _respond(response, 500 if cfg.legacy_isalive_status else 200)

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    def catch_all_endpoint(path: str) -> JSONResponse:
        return _respond(QueryResponse.failure(CATCH_ALL_MESSAGE), 404)

    app.state.config = cfg
    app.state.resolver = resolver
    return app
