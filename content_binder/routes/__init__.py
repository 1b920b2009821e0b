"""APIRouter registration for the binding service."""

from __future__ import annotations

from fastapi import APIRouter

from content_binder.routes.authoring import router as authoring_router
from content_binder.routes.render import router as render_router

api_router = APIRouter()
api_router.include_router(authoring_router, tags=["Authoring"])
api_router.include_router(render_router, tags=["Render"])

__all__ = ["api_router"]
