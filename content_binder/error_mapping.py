"""Central error mapping for the HTTP surface.

Single source of truth for mapping domain failures to problem+json codes and
HTTP statuses. Handlers import from here instead of hardcoding strings or
numbers.
"""

from __future__ import annotations

from content_binder.errors import BindingFailureReason

BINDING_ERROR_MAP = {
    BindingFailureReason.CONTENT_TYPE_MISMATCH: {
        "code": "BIND_CONTENT_TYPE_MISMATCH",
        "status": 422,
        "title": "Content Type Mismatch",
    },
    BindingFailureReason.UNSUPPORTED_CONVERSION: {
        "code": "BIND_UNSUPPORTED_CONVERSION",
        "status": 422,
        "title": "Unsupported Conversion",
    },
}

CONTENT_NOT_FOUND = {"code": "CONTENT_NOT_FOUND", "status": 404, "title": "Not Found"}
CONTENT_PARENT_NOT_FOUND = {"code": "CONTENT_PARENT_NOT_FOUND", "status": 404, "title": "Not Found"}
CONTENT_ROUTE_CONFLICT = {"code": "CONTENT_ROUTE_CONFLICT", "status": 409, "title": "Conflict"}
UNKNOWN_CONTENT_TYPE = {"code": "UNKNOWN_CONTENT_TYPE", "status": 404, "title": "Not Found"}

__all__ = [
    "BINDING_ERROR_MAP",
    "CONTENT_NOT_FOUND",
    "CONTENT_PARENT_NOT_FOUND",
    "CONTENT_ROUTE_CONFLICT",
    "UNKNOWN_CONTENT_TYPE",
]
