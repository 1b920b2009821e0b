"""Model binding failure notification.

Each binder owns a `ModelBindingEvent`. Observers are plain callables taking
``(sender, args)``; they may append to ``args.message`` and set
``args.restart`` but cannot stop the failure from being raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Any, Callable, Iterable, List
import logging

logger = logging.getLogger(__name__)

MODEL_BINDING_FAILED = "model_binding.failed"


@dataclass
class ModelBindingArgs:
    source_type: Any
    model_type: Any
    message: StringIO = field(default_factory=StringIO)
    restart: bool = False


ModelBindingObserver = Callable[[Any, ModelBindingArgs], None]


class ModelBindingEvent:
    def __init__(self, observers: Iterable[ModelBindingObserver] | None = None) -> None:
        self._observers: List[ModelBindingObserver] = list(observers or [])

    def subscribe(self, observer: ModelBindingObserver) -> None:
        self._observers.append(observer)

    def notify(self, sender: Any, args: ModelBindingArgs) -> None:
        """Invoke every observer once, in subscription order.

        An observer that raises is logged and skipped so that the remaining
        observers still run.
        """
        for observer in list(self._observers):
            try:
                observer(sender, args)
            except Exception:
                logger.error("%s observer_error observer=%r", MODEL_BINDING_FAILED, observer, exc_info=True)


def log_observer(sender: Any, args: ModelBindingArgs) -> None:
    logger.warning(
        "%s source=%s model=%s message=%s",
        MODEL_BINDING_FAILED,
        args.source_type,
        args.model_type,
        args.message.getvalue(),
    )


__all__ = [
    "MODEL_BINDING_FAILED",
    "ModelBindingArgs",
    "ModelBindingObserver",
    "ModelBindingEvent",
    "log_observer",
]
