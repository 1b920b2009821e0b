from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from content_binder.config import AppConfig, load_config
from content_binder.db.base import get_engine
from content_binder.errors import ContentParentNotFound, ContentRouteConflict, ModelBindingError
from content_binder.http.problem import (
    handle_http_exception,
    handle_model_binding_error,
    handle_parent_not_found,
    handle_request_validation_error,
    handle_route_conflict,
    handle_unexpected_error,
)
from content_binder.logging_setup import configure_logging
from content_binder.logic.binder import ContentModelBinder
from content_binder.logic.binder_provider import ContentModelBinderProvider
from content_binder.logic.events import ModelBindingObserver, log_observer
from content_binder.logic.model_factory import PublishedModelFactory, stale_model_observer
from content_binder.middleware.content_routing import ContentRoutingMiddleware
from content_binder.routes import api_router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    *,
    model_factory: Optional[PublishedModelFactory] = None,
    observers: Optional[Iterable[ModelBindingObserver]] = None,
) -> FastAPI:
    """Build the FastAPI application.

    The binder is created here with the logging and stale-model observers,
    followed by any extra `observers` supplied by the caller.
    """
    configure_logging()
    cfg = config or load_config()
    # Bind the shared engine to the configured database before any request
    get_engine(cfg.database.dsn)

    factory = model_factory or PublishedModelFactory()
    binder = ContentModelBinder([log_observer, stale_model_observer, *(observers or [])])

    app = FastAPI(title="Content Binding Service")
    app.state.config = cfg
    app.state.model_factory = factory
    app.state.binder_provider = ContentModelBinderProvider(binder)
    app.state.restart_requested = False

    app.add_middleware(
        ContentRoutingMiddleware,
        prefixes=cfg.routing.render_prefixes,
        reserved_area=cfg.mvc_area,
        model_factory=factory,
    )
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ModelBindingError, handle_model_binding_error)
    app.add_exception_handler(ContentRouteConflict, handle_route_conflict)
    app.add_exception_handler(ContentParentNotFound, handle_parent_not_found)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/health")
    def health(request: Request) -> Dict[str, Any]:
        return {
            "status": "ok",
            "restart_requested": bool(request.app.state.restart_requested),
            "mvc_area": request.app.state.config.mvc_area,
        }

    app.include_router(api_router)
    logger.info(
        "app.created prefixes=%s mvc_area=%s",
        ",".join(cfg.routing.render_prefixes),
        cfg.mvc_area,
    )
    return app


__all__ = ["create_app"]
