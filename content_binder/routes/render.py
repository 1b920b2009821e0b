"""Render endpoints bound through the content model binder.

Implements:
- GET /api/v1/render/{content_path}  -> binds `ContentModel`
- GET /api/v1/content/{content_path} -> binds raw `PublishedContent`
- GET /api/v1/typed/{content_path}?type=alias -> binds `ContentModel[M]` for
  the typed model registered under `alias`
"""

from __future__ import annotations

from typing import Any, Callable, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from content_binder.db.base import get_engine
from content_binder.error_mapping import CONTENT_NOT_FOUND, UNKNOWN_CONTENT_TYPE
from content_binder.http.problem import build_problem
from content_binder.logic.repository_content import list_children
from content_binder.models.binding import ModelBindingContext, type_name
from content_binder.models.content import PublishedContent
from content_binder.models.content_model import ContentModel


router = APIRouter(prefix="/api/v1")
logger = logging.getLogger(__name__)


async def bind_from_request(request: Request, model_type: Any) -> Any:
    """Bind `model_type` from the content matched for this request.

    Raises a 404 problem when the request carries no content to bind.
    """
    binder = request.app.state.binder_provider.get_binder(model_type)
    if binder is None:
        raise RuntimeError(f"no binder for model type {type_name(model_type)}")
    context = ModelBindingContext(
        model_type=model_type,
        model_name=getattr(model_type, "__name__", "model"),
        route_data=request.scope.get("route_data") or {},
    )
    await binder.bind_model_async(context)
    if not context.result.is_model_set:
        raise HTTPException(
            status_code=int(CONTENT_NOT_FOUND["status"]),
            detail=build_problem(CONTENT_NOT_FOUND, f"no content at {request.url.path}"),
        )
    return context.result.model


def bound_model(model_type: Any) -> Callable[[Request], Any]:
    async def _dependency(request: Request) -> Any:
        return await bind_from_request(request, model_type)

    return _dependency


def _model_view(model: ContentModel) -> Dict[str, Any]:
    return {
        "model_type": type_name(type(model)),
        "content_type": type_name(model.content_type),
        "content": model.content.to_dict(),
        "content_model": type_name(type(model.content)),
    }


@router.get("/render/{content_path:path}", summary="Render content as a ContentModel view")
async def render_content(content_path: str, model: ContentModel = Depends(bound_model(ContentModel))) -> Dict[str, Any]:
    return _model_view(model)


@router.get("/content/{content_path:path}", summary="Return the matched content node and its children")
async def get_content(content_path: str, content: PublishedContent = Depends(bound_model(PublishedContent))) -> Dict[str, Any]:
    children = list_children(get_engine(), content.id)
    return {
        "content": content.to_dict(),
        "content_model": type_name(type(content)),
        "children": [c.to_dict() for c in children],
    }


@router.get("/typed/{content_path:path}", summary="Render content as a typed ContentModel view")
async def render_typed(request: Request, content_path: str, alias: str = Query(..., alias="type", min_length=1)) -> Dict[str, Any]:
    model_cls = request.app.state.model_factory.model_type_for(alias)
    if model_cls is None:
        raise HTTPException(
            status_code=int(UNKNOWN_CONTENT_TYPE["status"]),
            detail=build_problem(UNKNOWN_CONTENT_TYPE, f"no typed model registered for '{alias}'"),
        )
    model = await bind_from_request(request, ContentModel[model_cls])
    return _model_view(model)


__all__ = ["router", "bind_from_request", "bound_model"]
