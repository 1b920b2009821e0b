"""Content authoring endpoint.

Implements:
- POST /api/v1/content
  - Creates a node beneath `parent_route` (root when omitted)
  - 409 CONTENT_ROUTE_CONFLICT when the computed route is taken
  - 404 CONTENT_PARENT_NOT_FOUND when the parent route has no content
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator
import logging

from content_binder.db.base import get_engine
from content_binder.logic.repository_content import create_content


router = APIRouter(prefix="/api/v1")
logger = logging.getLogger(__name__)


class CreateContentRequest(BaseModel):
    name: str = Field(min_length=1)
    content_type_alias: str = Field(min_length=1)
    parent_route: Optional[str] = None
    url_segment: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)
    sort_order: int = 0

    @field_validator("name", "content_type_alias")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


@router.post("/content", status_code=201, summary="Create a content node")
def create_content_node(payload: CreateContentRequest) -> Dict[str, Any]:
    node = create_content(
        get_engine(),
        payload.name,
        payload.content_type_alias,
        parent_route=payload.parent_route,
        url_segment=payload.url_segment,
        properties=payload.properties,
        sort_order=payload.sort_order,
    )
    return node.to_dict()


__all__ = ["router", "CreateContentRequest"]
