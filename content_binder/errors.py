"""Domain exceptions raised by binding and the content store."""

from __future__ import annotations

from enum import Enum
from typing import Any


class BindingFailureReason(str, Enum):
    CONTENT_TYPE_MISMATCH = "ContentTypeMismatch"
    UNSUPPORTED_CONVERSION = "UnsupportedConversion"


class ModelBindingError(Exception):
    """A source value could not be bound to the requested model type."""

    def __init__(
        self,
        message: str,
        *,
        reason: BindingFailureReason,
        source_type: Any,
        model_type: Any,
        restart: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.source_type = source_type
        self.model_type = model_type
        self.restart = restart


class ContentRouteConflict(Exception):
    def __init__(self, route: str) -> None:
        super().__init__(f"content already exists at route {route}")
        self.route = route


class ContentParentNotFound(Exception):
    def __init__(self, parent_route: str) -> None:
        super().__init__(f"parent content not found at route {parent_route}")
        self.parent_route = parent_route


__all__ = [
    "BindingFailureReason",
    "ModelBindingError",
    "ContentRouteConflict",
    "ContentParentNotFound",
]
