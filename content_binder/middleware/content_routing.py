"""Content routing middleware.

Matches GET/HEAD requests under the render prefixes to a published content
node and stores the resulting route values in the request scope under
``scope["route_data"][ROUTE_DEFINITION_TOKEN]``. Requests with no matching
content, or addressed to the reserved back-office area, pass through with
the route data untouched; handlers treat that as nothing to bind.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from sqlalchemy.engine import Engine

from content_binder.db.base import get_engine
from content_binder.logic.model_factory import PublishedModelFactory
from content_binder.logic.repository_content import get_content_by_route, normalize_route
from content_binder.models.routing import ROUTE_DEFINITION_TOKEN, PublishedRequestBuilder, RouteValues

logger = logging.getLogger(__name__)


class ContentRoutingMiddleware:
    def __init__(  # type: ignore[no-untyped-def]
        self,
        app,
        *,
        prefixes: Iterable[str],
        reserved_area: str = "",
        model_factory: Optional[PublishedModelFactory] = None,
        engine_factory: Callable[[], Engine] = get_engine,
    ) -> None:
        self.app = app
        self.prefixes = tuple(p.rstrip("/") for p in prefixes)
        self.reserved_area = (reserved_area or "").strip().lower()
        self.model_factory = model_factory
        self.engine_factory = engine_factory

    def content_path(self, path: str) -> Optional[str]:
        """Return the content route addressed by `path`, or None when unrouted."""
        for prefix in self.prefixes:
            if path == prefix or path.startswith(prefix + "/"):
                route = normalize_route(path[len(prefix):])
                first = route.strip("/").split("/", 1)[0]
                if self.reserved_area and first == self.reserved_area:
                    return None
                return route
        return None

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http" or str(scope.get("method") or "").upper() not in {"GET", "HEAD"}:
            await self.app(scope, receive, send)
            return

        path = str(scope.get("path") or "")
        route = self.content_path(path)
        if route is not None:
            content = get_content_by_route(self.engine_factory(), route)
            if content is not None:
                if self.model_factory is not None:
                    content = self.model_factory.create_model(content)
                published_request = PublishedRequestBuilder(path).set_published_content(content).build()
                scope.setdefault("route_data", {})[ROUTE_DEFINITION_TOKEN] = RouteValues(published_request)
                logger.info("content_routing.matched path=%s content_id=%s", path, content.id)
            else:
                logger.info("content_routing.no_content path=%s route=%s", path, route)

        await self.app(scope, receive, send)


__all__ = ["ContentRoutingMiddleware"]
