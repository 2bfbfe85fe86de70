from typing import Callable

from starlette.types import ASGIApp, Receive, Scope, Send

from scopelog.config import Settings
from scopelog.recorder import LogEntry
from scopelog.sinks import Sink, stream_sink_factory
from scopelog.storyteller import Storyteller, default_storyteller
from scopelog.work import WorkUnit


class LogEntryMiddleware:
    """
    Writes one log entry per HTTP request.

    Every request runs inside its own LogEntry with a fresh sink from
    'sink_factory'; sinks are closed afterwards only with 'close_sinks'.
    Exceptions are recorded as a panic and then re-raised, so the server
    error handling further out still produces the 500.

    This middleware should generally wrap everything else, so the timing
    covers the whole stack.
    """

    def __init__(
        self,
        app: ASGIApp,
        sink_factory: Callable[[], Sink] | None = None,
        settings: Settings | None = None,
        storyteller: Storyteller | None = None,
        close_sinks: bool = False,
    ) -> None:
        self.app = app
        self.close_sinks = close_sinks
        self.settings = settings or Settings()
        self.sink_factory = sink_factory or stream_sink_factory(self.settings)
        self.storyteller = storyteller or default_storyteller()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        work = WorkUnit.from_scope(scope)
        story = self.storyteller.bind(method=work.method, target=work.target)

        entry = LogEntry.start(
            self.sink_factory(),
            work,
            outer_frames=self.settings.outer_frames,
            strict=self.settings.strict,
            close=self.close_sinks,
            story=story,
        )

        try:
            with entry:
                await self.app(scope, receive, send)

        except Exception as exc:
            story.failure("request.error", exc=exc, reason="Unexpected error")
            raise
