import time
from functools import cache
from typing import Any, Iterable

from .types import LogRecord, StoryListener


class Storyteller:
    """
    Storyteller is where scopelog reports on itself (sink failures, errors
    raised around a recorded scope). Records are passed to all listeners.
    """

    __slots__ = ("listeners", "ctx")

    def __init__(self, listeners: Iterable[StoryListener], **kwargs: Any):
        self.listeners = list(listeners)
        self.ctx = kwargs

    def enqueue(self, record: LogRecord) -> None:
        for listener in self.listeners:
            listener.enqueue(record)

    def bind(self, **kwargs: Any) -> "Storyteller":
        """
        Bind context to the storyteller instance. Returns a new storyteller instance with the bound context.
        """
        return Storyteller(self.listeners, **self.ctx, **kwargs)

    def tell(self, event: str, **kwargs: Any) -> None:
        self.enqueue(
            {
                "time_ns": time.time_ns(),
                "event": event,
                **self.ctx,
                **kwargs,
            }
        )

    def failure(
        self,
        event: str,
        *,
        exc: BaseException | None = None,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Log a failure of scopelog itself or of the scope around it.
        """
        self.tell(event, exc=exc, error="system", reason=reason, **kwargs)


@cache
def default_storyteller() -> Storyteller:
    """Shared storyteller printing to stderr, used when none is given."""
    from .listeners.rich import RichListener

    return Storyteller([RichListener()])
