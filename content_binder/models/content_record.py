"""ORM table for published content, unique over route."""

from __future__ import annotations

from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime, Integer, JSON, String, UniqueConstraint


Base = declarative_base()


class ContentRecord(Base):  # type: ignore[valid-type]
    __tablename__ = "published_content"
    __table_args__ = (
        UniqueConstraint("route", name="uq_published_content_route"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String, nullable=False)
    parent_id = Column(Integer, nullable=True)
    name = Column(String, nullable=False)
    url_segment = Column(String, nullable=False)
    route = Column(String, nullable=False)
    content_type_alias = Column(String, nullable=False)
    level = Column(Integer, nullable=False, default=1)
    sort_order = Column(Integer, nullable=False, default=0)
    properties = Column(JSON, nullable=True)
    create_date = Column(DateTime, nullable=False)
    update_date = Column(DateTime, nullable=False)


__all__ = ["ContentRecord", "Base"]
