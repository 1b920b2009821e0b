"""View-model wrappers carrying a single published content node.

`ContentModel` is the plain wrapper. `ContentModel[S]` is a subclass bound to
the content subtype `S`; constructing it with a node that is not an `S`
raises `TypeError`. Classes outside this module that carry content can take
part in binding by subclassing or registering with `IContentModel`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Optional, Type

from content_binder.models.content import PublishedContent


class IContentModel(ABC):
    """The "has content" capability."""

    @property
    @abstractmethod
    def content(self) -> PublishedContent: ...


# S -> ContentModel[S], so that ContentModel[S] is ContentModel[S]
_CONSTRAINED: Dict[type, type] = {}


class ContentModel(IContentModel):
    content_constraint: ClassVar[Optional[Type[PublishedContent]]] = None

    def __class_getitem__(cls, content_type: Type[PublishedContent]) -> type:
        if cls is not ContentModel:
            raise TypeError(f"{cls.__qualname__} cannot be parameterised")
        if not (isinstance(content_type, type) and issubclass(content_type, PublishedContent)):
            raise TypeError(f"ContentModel[...] requires a PublishedContent subtype, got {content_type!r}")
        model = _CONSTRAINED.get(content_type)
        if model is None:
            name = f"ContentModel[{content_type.__module__}.{content_type.__qualname__}]"
            model = type(
                name,
                (ContentModel,),
                {"content_constraint": content_type, "__module__": __name__, "__qualname__": name},
            )
            model = _CONSTRAINED.setdefault(content_type, model)
        return model

    def __init__(self, content: PublishedContent, content_type: Optional[Type[PublishedContent]] = None) -> None:
        if content is None:
            raise ValueError("content must not be None")
        constraint = type(self).content_constraint
        if content_type is None:
            content_type = constraint or PublishedContent
        elif constraint is not None and not issubclass(content_type, constraint):
            raise TypeError(f"{content_type.__qualname__} does not satisfy {constraint.__qualname__}")
        if not isinstance(content, content_type):
            raise TypeError(
                f"content of type {type(content).__qualname__} does not satisfy {content_type.__qualname__}"
            )
        self._content = content
        self._content_type = content_type

    @property
    def content(self) -> PublishedContent:
        return self._content

    @property
    def content_type(self) -> Type[PublishedContent]:
        return self._content_type

    def __repr__(self) -> str:
        return f"ContentModel[{self._content_type.__name__}]({self._content!r})"


def constraint_of(model_type: object) -> Optional[Type[PublishedContent]]:
    """Return `S` when `model_type` is exactly `ContentModel[S]`, else None."""
    if not isinstance(model_type, type):
        return None
    constraint = model_type.__dict__.get("content_constraint")
    if constraint is not None and _CONSTRAINED.get(constraint) is model_type:
        return constraint
    return None


__all__ = ["IContentModel", "ContentModel", "constraint_of"]
