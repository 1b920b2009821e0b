"""Content model binder.

Maps between published content and the view-model shapes a handler asks
for. Sources and targets are any of ``PublishedContent`` (or a subtype),
``ContentModel`` and ``ContentModel[S]``; anything else goes through generic
conversion. Within a request only published content exists in the route
data, so the async entry point only ever binds from a content node.

No FastAPI/Starlette imports.
"""

from __future__ import annotations

from typing import Any, Iterable, NoReturn, Optional
import logging

from content_binder.errors import BindingFailureReason, ModelBindingError
from content_binder.logic.conversion import try_convert_to
from content_binder.logic.events import ModelBindingArgs, ModelBindingEvent, ModelBindingObserver
from content_binder.models.binding import (
    ConstrainedWrapper,
    ModelBindingContext,
    ModelBindingResult,
    PlainWrapper,
    RawContent,
    shape_for,
    type_name,
)
from content_binder.models.content import PublishedContent
from content_binder.models.content_model import ContentModel, IContentModel
from content_binder.models.routing import ROUTE_DEFINITION_TOKEN, RouteValues


logger = logging.getLogger(__name__)


class ContentModelBinder:
    def __init__(self, observers: Iterable[ModelBindingObserver] | None = None) -> None:
        self.model_binding_failed = ModelBindingEvent(observers)

    async def bind_model_async(self, context: ModelBindingContext) -> None:
        """Bind from the content matched for the current request, if any."""
        route_values = (context.route_data or {}).get(ROUTE_DEFINITION_TOKEN)
        if not isinstance(route_values, RouteValues):
            return
        self.bind_model(context, route_values.published_request.published_content, context.model_type)

    def bind_model(self, context: ModelBindingContext, source: Any, model_type: Any) -> None:
        result = self.resolve(source, model_type)
        if result.is_model_set:
            context.result = result

    def resolve(self, source: Any, model_type: Any) -> ModelBindingResult:
        """Produce a value of `model_type` from `source`.

        Returns a result with nothing set for a ``None`` source. Raises
        `ModelBindingError` when the source cannot be bound.
        """
        if source is None:
            return ModelBindingResult.failed()

        shape = shape_for(model_type)
        if shape.accepts(source):
            return ModelBindingResult.success(source)

        content = self._content_of(source)
        if content is not None:
            if isinstance(shape, RawContent):
                if not isinstance(content, shape.content_type):
                    self._fail(BindingFailureReason.CONTENT_TYPE_MISMATCH, True, False, type(content), shape.content_type)
                return ModelBindingResult.success(content)
            if isinstance(shape, PlainWrapper):
                return ModelBindingResult.success(ContentModel(content))
            if isinstance(shape, ConstrainedWrapper):
                if not isinstance(content, shape.content_type):
                    self._fail(BindingFailureReason.CONTENT_TYPE_MISMATCH, True, True, type(content), shape.content_type)
                return ModelBindingResult.success(ContentModel[shape.content_type](content))

        # Last chance: convert the source itself
        attempt = try_convert_to(source, shape.model_type)
        if attempt.success:
            return ModelBindingResult.success(attempt.result)
        self._fail(BindingFailureReason.UNSUPPORTED_CONVERSION, False, False, type(source), model_type)

    @staticmethod
    def _content_of(source: Any) -> Optional[PublishedContent]:
        if isinstance(source, PublishedContent):
            return source
        if isinstance(source, IContentModel):
            # Registered foreign wrappers may carry anything
            content = source.content
            return content if isinstance(content, PublishedContent) else None
        attempt = try_convert_to(source, PublishedContent)
        if attempt.success and isinstance(attempt.result, PublishedContent):
            return attempt.result
        return None

    def _fail(
        self,
        reason: BindingFailureReason,
        source_content: bool,
        model_content: bool,
        source_type: Any,
        model_type: Any,
    ) -> NoReturn:
        args = ModelBindingArgs(source_type=source_type, model_type=model_type)
        args.message.write("Cannot bind source")
        if source_content:
            args.message.write(" content")
        args.message.write(f" type {type_name(source_type)} to model")
        if model_content:
            args.message.write(" content")
        args.message.write(f" type {type_name(model_type)}.")

        # Observers may add detail and ask for an application restart
        self.model_binding_failed.notify(self, args)

        message = args.message.getvalue()
        logger.info("model_binding.raise reason=%s restart=%s", reason.value, args.restart)
        raise ModelBindingError(
            message,
            reason=reason,
            source_type=source_type,
            model_type=model_type,
            restart=args.restart,
        )


__all__ = ["ContentModelBinder"]
