"""Published content node types.

`PublishedContent` is the "is content" capability every rendered node
satisfies. `ContentNode` is the concrete node produced by the content store;
typed models derive from `PublishedContentWrapped` and delegate to the node
they wrap.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Mapping, Optional


class PublishedContent(ABC):
    """A rendered content item. Immutable for binding purposes."""

    @property
    @abstractmethod
    def id(self) -> int: ...

    @property
    @abstractmethod
    def key(self) -> str: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def content_type_alias(self) -> str: ...

    @property
    @abstractmethod
    def route(self) -> str: ...

    @property
    @abstractmethod
    def parent_id(self) -> Optional[int]: ...

    @property
    @abstractmethod
    def level(self) -> int: ...

    @property
    @abstractmethod
    def sort_order(self) -> int: ...

    @property
    @abstractmethod
    def update_date(self) -> Optional[datetime]: ...

    @property
    @abstractmethod
    def properties(self) -> Mapping[str, Any]: ...

    def value(self, alias: str, default: Any = None) -> Any:
        return self.properties.get(alias, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "content_type_alias": self.content_type_alias,
            "route": self.route,
            "parent_id": self.parent_id,
            "level": self.level,
            "sort_order": self.sort_order,
            "update_date": self.update_date.isoformat() if self.update_date else None,
            "properties": dict(self.properties),
        }


class ContentNode(PublishedContent):
    def __init__(
        self,
        id: int,
        name: str,
        *,
        key: str = "",
        content_type_alias: str = "",
        route: str = "/",
        parent_id: Optional[int] = None,
        level: int = 1,
        sort_order: int = 0,
        update_date: Optional[datetime] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._id = int(id)
        self._name = str(name)
        self._key = str(key)
        self._content_type_alias = str(content_type_alias)
        self._route = str(route)
        self._parent_id = parent_id
        self._level = int(level)
        self._sort_order = int(sort_order)
        self._update_date = update_date
        # Copy so callers cannot mutate the node through their own mapping
        self._properties: Dict[str, Any] = dict(properties or {})

    @property
    def id(self) -> int:
        return self._id

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> str:
        return self._name

    @property
    def content_type_alias(self) -> str:
        return self._content_type_alias

    @property
    def route(self) -> str:
        return self._route

    @property
    def parent_id(self) -> Optional[int]:
        return self._parent_id

    @property
    def level(self) -> int:
        return self._level

    @property
    def sort_order(self) -> int:
        return self._sort_order

    @property
    def update_date(self) -> Optional[datetime]:
        return self._update_date

    @property
    def properties(self) -> Mapping[str, Any]:
        return dict(self._properties)

    def __repr__(self) -> str:
        return f"ContentNode(id={self._id!r}, name={self._name!r}, alias={self._content_type_alias!r})"


class PublishedContentWrapped(PublishedContent):
    """Base for typed content models; every member reads through to `inner`."""

    def __init__(self, content: PublishedContent) -> None:
        if content is None:
            raise ValueError("content must not be None")
        self._inner = content

    @property
    def id(self) -> int:
        return self._inner.id

    @property
    def key(self) -> str:
        return self._inner.key

    @property
    def name(self) -> str:
        return self._inner.name

    @property
    def content_type_alias(self) -> str:
        return self._inner.content_type_alias

    @property
    def route(self) -> str:
        return self._inner.route

    @property
    def parent_id(self) -> Optional[int]:
        return self._inner.parent_id

    @property
    def level(self) -> int:
        return self._inner.level

    @property
    def sort_order(self) -> int:
        return self._inner.sort_order

    @property
    def update_date(self) -> Optional[datetime]:
        return self._inner.update_date

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._inner.properties


__all__ = ["PublishedContent", "ContentNode", "PublishedContentWrapped"]
