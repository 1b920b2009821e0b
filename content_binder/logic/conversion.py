"""Generic value conversion used as the binder's fallback.

No FastAPI/Starlette imports. `try_convert_to` never raises for a failed
conversion; it returns a failed `Attempt` carrying the cause when there is
one. Converters are consulted in registration order, then pydantic is asked
to validate the value against the target type.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Callable, Generic, List, Optional, TypeVar
import logging

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from content_binder.models.content import ContentNode


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Attempt(Generic[T]):
    success: bool
    result: Optional[T] = None
    exception: Optional[BaseException] = None

    @classmethod
    def succeed(cls, result: T) -> "Attempt[T]":
        return cls(success=True, result=result)

    @classmethod
    def fail(cls, exception: Optional[BaseException] = None) -> "Attempt[T]":
        return cls(success=False, exception=exception)

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class TypeConverter:
    name: str
    can_convert: Callable[[type, Any], bool]
    convert: Callable[[Any, Any], Any]


def _accepts_content_node(target: Any) -> bool:
    if not isinstance(target, type):
        return False
    try:
        return issubclass(ContentNode, target)
    except TypeError:
        return False


def _mapping_to_content_node(value: Mapping[str, Any], target: Any) -> ContentNode:
    if "id" not in value or "name" not in value:
        raise KeyError("content mapping requires 'id' and 'name'")
    return ContentNode(
        int(value["id"]),
        str(value["name"]),
        key=str(value.get("key") or ""),
        content_type_alias=str(value.get("content_type_alias") or ""),
        route=str(value.get("route") or "/"),
        parent_id=value.get("parent_id"),
        level=int(value.get("level") or 1),
        sort_order=int(value.get("sort_order") or 0),
        properties=value.get("properties") or {},
    )


CONVERTER_REGISTRY: List[TypeConverter] = [
    TypeConverter(
        name="mapping_to_content_node",
        can_convert=lambda source_type, target: issubclass(source_type, Mapping) and _accepts_content_node(target),
        convert=_mapping_to_content_node,
    ),
]


def register_converter(converter: TypeConverter) -> None:
    """Append a converter; earlier registrations win."""
    CONVERTER_REGISTRY.append(converter)


def unregister_converter(name: str) -> None:
    CONVERTER_REGISTRY[:] = [c for c in CONVERTER_REGISTRY if c.name != name]


def _validate_with_pydantic(value: Any, target: Any) -> Attempt[Any]:
    try:
        adapter = TypeAdapter(target)
    except (PydanticUserError, TypeError) as exc:
        # No schema for the target (arbitrary classes, ABCs): not convertible
        return Attempt.fail(exc)
    try:
        return Attempt.succeed(adapter.validate_python(value))
    except ValidationError as exc:
        return Attempt.fail(exc)


def try_convert_to(value: Any, target: Any) -> Attempt[Any]:
    """Attempt to convert `value` to `target`."""
    if value is None:
        return Attempt.fail()
    if target is object or target is Any:
        return Attempt.succeed(value)
    if isinstance(target, type):
        try:
            if isinstance(value, target):
                return Attempt.succeed(value)
        except TypeError:
            # Protocols without @runtime_checkable refuse instance checks
            pass
    source_type = type(value)
    for converter in CONVERTER_REGISTRY:
        if not converter.can_convert(source_type, target):
            continue
        try:
            converted = converter.convert(value, target)
        except (ValueError, TypeError, KeyError) as exc:
            logger.info("conversion.failed converter=%s source=%s", converter.name, source_type.__name__)
            return Attempt.fail(exc)
        return Attempt.succeed(converted)
    return _validate_with_pydantic(value, target)


__all__ = [
    "Attempt",
    "TypeConverter",
    "CONVERTER_REGISTRY",
    "register_converter",
    "unregister_converter",
    "try_convert_to",
]
