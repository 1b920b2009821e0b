"""Content, wrapper and binding types."""

from content_binder.models.content import ContentNode, PublishedContent, PublishedContentWrapped
from content_binder.models.content_model import ContentModel, IContentModel
from content_binder.models.binding import ModelBindingContext, ModelBindingResult, shape_for
from content_binder.models.routing import (
    ROUTE_DEFINITION_TOKEN,
    PublishedRequest,
    PublishedRequestBuilder,
    RouteValues,
)

__all__ = [
    "ContentNode",
    "PublishedContent",
    "PublishedContentWrapped",
    "ContentModel",
    "IContentModel",
    "ModelBindingContext",
    "ModelBindingResult",
    "shape_for",
    "ROUTE_DEFINITION_TOKEN",
    "PublishedRequest",
    "PublishedRequestBuilder",
    "RouteValues",
]
