"""Binding shapes, results and the per-request binding context.

A model type requested by a caller is reduced to one of four shapes:

- ``RawContent(S)``: a `PublishedContent` subtype (the node itself)
- ``PlainWrapper()``: exactly `ContentModel`
- ``ConstrainedWrapper(S)``: `ContentModel[S]`
- ``OtherType(T)``: anything else, reachable only through conversion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union, get_origin

from content_binder.models.content import PublishedContent
from content_binder.models.content_model import ContentModel, constraint_of


def type_name(tp: Any) -> str:
    """Return the qualified name used in binding messages."""
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


@dataclass(frozen=True)
class RawContent:
    content_type: type

    @property
    def model_type(self) -> type:
        return self.content_type

    def accepts(self, source: Any) -> bool:
        return isinstance(source, self.content_type)


@dataclass(frozen=True)
class PlainWrapper:
    @property
    def model_type(self) -> type:
        return ContentModel

    def accepts(self, source: Any) -> bool:
        return isinstance(source, ContentModel)


@dataclass(frozen=True)
class ConstrainedWrapper:
    content_type: type

    @property
    def model_type(self) -> Any:
        return ContentModel[self.content_type]

    def accepts(self, source: Any) -> bool:
        return isinstance(source, ContentModel) and issubclass(source.content_type, self.content_type)


@dataclass(frozen=True)
class OtherType:
    model_type: Any

    def accepts(self, source: Any) -> bool:
        target = get_origin(self.model_type) or self.model_type
        if not isinstance(target, type):
            return False
        try:
            return isinstance(source, target)
        except TypeError:
            # Protocols without @runtime_checkable refuse instance checks
            return False


ShapeDescriptor = Union[RawContent, PlainWrapper, ConstrainedWrapper, OtherType]


def shape_for(model_type: Any) -> ShapeDescriptor:
    """Reduce a requested model type to its binding shape."""
    if model_type is ContentModel:
        return PlainWrapper()
    constraint = constraint_of(model_type)
    if constraint is not None:
        return ConstrainedWrapper(constraint)
    if isinstance(model_type, type) and issubclass(model_type, PublishedContent):
        return RawContent(model_type)
    return OtherType(model_type)


@dataclass(frozen=True)
class ModelBindingResult:
    is_model_set: bool = False
    model: Any = None

    @classmethod
    def success(cls, model: Any) -> "ModelBindingResult":
        return cls(is_model_set=True, model=model)

    @classmethod
    def failed(cls) -> "ModelBindingResult":
        return cls()


@dataclass
class ModelBindingContext:
    """State handed to the binder for one binding attempt."""

    model_type: Any = None
    model_name: str = ""
    route_data: Dict[str, Any] = field(default_factory=dict)
    result: ModelBindingResult = field(default_factory=ModelBindingResult.failed)

    @property
    def model(self) -> Optional[Any]:
        return self.result.model


__all__ = [
    "RawContent",
    "PlainWrapper",
    "ConstrainedWrapper",
    "OtherType",
    "ShapeDescriptor",
    "shape_for",
    "type_name",
    "ModelBindingResult",
    "ModelBindingContext",
]
