"""Repository for published content nodes addressed by route.

Routes are lower-case, slash-delimited and slash-terminated (``/a/b/``). The
empty route ``/`` addresses the first root node.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from content_binder.errors import ContentParentNotFound, ContentRouteConflict
from content_binder.models.content import ContentNode
from content_binder.models.content_record import Base, ContentRecord


logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def normalize_route(path: str | None) -> str:
    segments = [s for s in str(path or "").strip().lower().split("/") if s]
    if not segments:
        return "/"
    return "/" + "/".join(segments) + "/"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", str(name or "").lower()).strip("-")
    return slug or "item"


def _to_node(record: ContentRecord) -> ContentNode:
    return ContentNode(
        record.id,
        record.name,
        key=record.key,
        content_type_alias=record.content_type_alias,
        route=record.route,
        parent_id=record.parent_id,
        level=record.level,
        sort_order=record.sort_order,
        update_date=record.update_date,
        properties=record.properties or {},
    )


def get_content_by_route(engine: Engine, route: str | None) -> Optional[ContentNode]:
    normalized = normalize_route(route)
    with Session(engine) as session:
        if normalized == "/":
            stmt = (
                select(ContentRecord)
                .where(ContentRecord.parent_id.is_(None))
                .order_by(ContentRecord.sort_order, ContentRecord.id)
                .limit(1)
            )
        else:
            stmt = select(ContentRecord).where(ContentRecord.route == normalized)
        record = session.execute(stmt).scalars().first()
        return _to_node(record) if record else None


def get_content_by_id(engine: Engine, content_id: int) -> Optional[ContentNode]:
    with Session(engine) as session:
        record = session.get(ContentRecord, int(content_id))
        return _to_node(record) if record else None


def list_children(engine: Engine, parent_id: int | None) -> List[ContentNode]:
    with Session(engine) as session:
        if parent_id is None:
            condition = ContentRecord.parent_id.is_(None)
        else:
            condition = ContentRecord.parent_id == int(parent_id)
        stmt = select(ContentRecord).where(condition).order_by(ContentRecord.sort_order, ContentRecord.id)
        return [_to_node(r) for r in session.execute(stmt).scalars().all()]


def create_content(
    engine: Engine,
    name: str,
    content_type_alias: str,
    *,
    parent_route: str | None = None,
    url_segment: str | None = None,
    properties: Mapping[str, Any] | None = None,
    sort_order: int = 0,
) -> ContentNode:
    """Insert a node beneath `parent_route` (or at the root) and return it."""
    segment = slugify(url_segment or name)
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    with Session(engine) as session:
        parent: Optional[ContentRecord] = None
        if parent_route is not None and normalize_route(parent_route) != "/":
            parent = session.execute(
                select(ContentRecord).where(ContentRecord.route == normalize_route(parent_route))
            ).scalars().first()
            if parent is None:
                raise ContentParentNotFound(normalize_route(parent_route))
        base = parent.route if parent else "/"
        route = normalize_route(base + segment)
        exists = session.execute(select(ContentRecord.id).where(ContentRecord.route == route)).first()
        if exists:
            raise ContentRouteConflict(route)
        props: Dict[str, Any] = dict(properties or {})
        record = ContentRecord(
            key=str(uuid.uuid4()),
            parent_id=parent.id if parent else None,
            name=str(name),
            url_segment=segment,
            route=route,
            content_type_alias=str(content_type_alias),
            level=(parent.level + 1) if parent else 1,
            sort_order=int(sort_order),
            properties=props,
            create_date=now,
            update_date=now,
        )
        session.add(record)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ContentRouteConflict(route) from exc
        session.refresh(record)
        logger.info("content.created id=%s route=%s alias=%s", record.id, route, record.content_type_alias)
        return _to_node(record)


__all__ = [
    "ensure_schema",
    "normalize_route",
    "slugify",
    "get_content_by_route",
    "get_content_by_id",
    "list_children",
    "create_content",
]
