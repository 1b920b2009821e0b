"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type, a payload builder driven by
`content_binder.error_mapping`, and the handler callables registered by the
application factory.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping
import logging
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from content_binder.error_mapping import (
    BINDING_ERROR_MAP,
    CONTENT_PARENT_NOT_FOUND,
    CONTENT_ROUTE_CONFLICT,
)
from content_binder.errors import ContentParentNotFound, ContentRouteConflict, ModelBindingError
from content_binder.models.binding import type_name

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def build_problem(entry: Mapping[str, Any], detail: str, **extra: Any) -> Dict[str, Any]:
    """Return a problem+json dict for a mapping entry."""
    problem: Dict[str, Any] = {
        "title": entry["title"],
        "status": int(entry["status"]),
        "detail": detail,
        "code": entry["code"],
    }
    problem.update(extra)
    logger.info("error_handler.handle code=%s", problem["code"])
    return problem


def problem_response(problem: Mapping[str, Any]) -> JSONResponse:
    return JSONResponse(dict(problem), status_code=int(problem["status"]), media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status_code = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"title": "Error", "status": status_code, "detail": str(exc.detail or "")}
    headers = dict(exc.headers) if isinstance(getattr(exc, "headers", None), dict) else None
    return JSONResponse(detail, status_code=status_code, media_type=PROBLEM_MEDIA_TYPE, headers=headers)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "errors": jsonable_encoder(exc.errors()),
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_model_binding_error(request: Request, exc: ModelBindingError) -> JSONResponse:  # noqa: D401
    if exc.restart:
        # Acting on the flag is left to whatever supervises the process
        request.app.state.restart_requested = True
        logger.warning("model_binding.restart_requested path=%s", request.url.path)
    problem = build_problem(
        BINDING_ERROR_MAP[exc.reason],
        exc.message,
        source_type=type_name(exc.source_type),
        model_type=type_name(exc.model_type),
    )
    return problem_response(problem)


async def handle_route_conflict(request: Request, exc: ContentRouteConflict) -> JSONResponse:  # noqa: D401
    return problem_response(build_problem(CONTENT_ROUTE_CONFLICT, str(exc), route=exc.route))


async def handle_parent_not_found(request: Request, exc: ContentParentNotFound) -> JSONResponse:  # noqa: D401
    return problem_response(build_problem(CONTENT_PARENT_NOT_FOUND, str(exc), parent_route=exc.parent_route))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "build_problem",
    "problem_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_model_binding_error",
    "handle_route_conflict",
    "handle_parent_not_found",
    "handle_unexpected_error",
]
