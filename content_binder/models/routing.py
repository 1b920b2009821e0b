"""Route values placed on a request once it has been matched to content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from content_binder.models.content import PublishedContent


# Key under which route values live in the request's route data
ROUTE_DEFINITION_TOKEN = "content_route_definition"


@dataclass(frozen=True)
class PublishedRequest:
    uri: str
    published_content: Optional[PublishedContent] = None


class PublishedRequestBuilder:
    def __init__(self, uri: str) -> None:
        self._uri = uri
        self._content: Optional[PublishedContent] = None

    def set_published_content(self, content: Optional[PublishedContent]) -> "PublishedRequestBuilder":
        self._content = content
        return self

    def build(self) -> PublishedRequest:
        return PublishedRequest(uri=self._uri, published_content=self._content)


@dataclass(frozen=True)
class RouteValues:
    published_request: PublishedRequest


__all__ = ["ROUTE_DEFINITION_TOKEN", "PublishedRequest", "PublishedRequestBuilder", "RouteValues"]
