"""Selects the content model binder for model types it knows how to produce."""

from __future__ import annotations

from typing import Any, Optional

from content_binder.logic.binder import ContentModelBinder
from content_binder.models.binding import ConstrainedWrapper, PlainWrapper, RawContent, shape_for


class ContentModelBinderProvider:
    def __init__(self, binder: ContentModelBinder | None = None) -> None:
        self._binder = binder or ContentModelBinder()

    def get_binder(self, model_type: Any) -> Optional[ContentModelBinder]:
        """Return the binder for content shapes, or None for anything else.

        Subclasses of `ContentModel` and the bare `IContentModel` capability
        are not content shapes; they are left to other binders.
        """
        if isinstance(shape_for(model_type), (RawContent, PlainWrapper, ConstrainedWrapper)):
            return self._binder
        return None


__all__ = ["ContentModelBinderProvider"]
