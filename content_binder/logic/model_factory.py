"""Typed content models keyed by content type alias.

Typed models derive from `PublishedContentWrapped`. The factory turns a raw
node from the store into its typed model when one is registered for the
node's alias.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type
import logging

from content_binder.logic.events import ModelBindingArgs
from content_binder.models.binding import type_name
from content_binder.models.content import PublishedContent, PublishedContentWrapped


logger = logging.getLogger(__name__)


class PublishedModelFactory:
    def __init__(self) -> None:
        self._models: Dict[str, Type[PublishedContentWrapped]] = {}

    def register(self, alias: str, model_cls: Type[PublishedContentWrapped]) -> None:
        if not (isinstance(model_cls, type) and issubclass(model_cls, PublishedContentWrapped)):
            raise TypeError("typed models must derive from PublishedContentWrapped")
        key = str(alias).strip().lower()
        if not key:
            raise ValueError("content type alias must be non-empty")
        self._models[key] = model_cls
        logger.info("model_factory.register alias=%s model=%s", key, type_name(model_cls))

    def model_type_for(self, alias: str) -> Optional[Type[PublishedContentWrapped]]:
        return self._models.get(str(alias or "").strip().lower())

    def create_model(self, content: Optional[PublishedContent]) -> Optional[PublishedContent]:
        if content is None or isinstance(content, PublishedContentWrapped):
            return content
        model_cls = self.model_type_for(content.content_type_alias)
        return model_cls(content) if model_cls else content


def stale_model_observer(sender: Any, args: ModelBindingArgs) -> None:
    """Flag bindings that failed only because a model class was reloaded.

    Two distinct classes with the same qualified name mean one of them comes
    from a stale import; binding cannot succeed until the process restarts.
    """
    source, model = args.source_type, args.model_type
    if not (isinstance(source, type) and isinstance(model, type)) or source is model:
        return
    if type_name(source) != type_name(model):
        return
    args.message.write(
        " The source and model types have the same name but were loaded separately;"
        " the typed models are out of date and the application should restart."
    )
    args.restart = True
    logger.warning("model_factory.stale_models type=%s", type_name(model))


__all__ = ["PublishedModelFactory", "stale_model_observer"]
