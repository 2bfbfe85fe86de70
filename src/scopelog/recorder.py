import time
from types import TracebackType
from typing import Any, Callable

from scopelog.duration import format_duration
from scopelog.errors import LogWriteError
from scopelog.frames import Resolver, capture_frames, resolve
from scopelog.sinks import Sink, is_binary
from scopelog.storyteller import Storyteller, default_storyteller
from scopelog.work import WorkUnit


class LogEntry:
    """
    Guard that writes exactly one log entry for a unit of work.

    The entry is written when the scope ends: the elapsed time on a normal
    exit, or a stack trace marked ``PANIC!`` when the scope failed.

        with LogEntry.start(sys.stdout, request):
            ...  # process the request here
        # <-- the entry is written here

    Outside a ``with`` block, call 'finish' on every exit path; anything after
    the first call is a no-op. A failure the handler catches itself can be
    recorded with 'mark_failed' so the entry still reports it.

    Sink errors stop the entry where it is and are reported to the
    storyteller. With 'strict' they are raised as LogWriteError.
    """

    __slots__ = (
        "line",
        "output",
        "start_time",
        "clock",
        "resolver",
        "outer_frames",
        "strict",
        "close",
        "story",
        "_failure",
        "_finished",
    )

    def __init__(
        self,
        output: Sink,
        work: Any,
        *,
        clock: Callable[[], int] = time.perf_counter_ns,
        resolver: Resolver = resolve,
        outer_frames: bool = True,
        strict: bool = False,
        close: bool = False,
        story: Storyteller | None = None,
    ) -> None:
        self.line = str(WorkUnit.describe(work))
        self.output = output
        self.clock = clock
        self.resolver = resolver
        self.outer_frames = outer_frames
        self.strict = strict
        self.close = close
        self.story = story
        self._failure: BaseException | None = None
        self._finished = False
        # Last, so that building the line is not counted
        self.start_time = clock()

    @classmethod
    def start(cls, output: Sink, work: Any, **kwargs: Any) -> "LogEntry":
        """Start a log entry for 'work', taking ownership of 'output'."""
        return cls(output, work, **kwargs)

    @property
    def finished(self) -> bool:
        return self._finished

    def mark_failed(self, exc: BaseException) -> None:
        """Record a failure so the entry is written as a panic."""
        self._failure = exc

    def __enter__(self) -> "LogEntry":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.finish(exc)

    def finish(self, failure: BaseException | None = None) -> None:
        """Write the entry. Only the first call does anything."""
        if self._finished:
            return
        self._finished = True

        if failure is None:
            failure = self._failure

        try:
            self._write(failure)
        except (OSError, ValueError, TypeError) as exc:
            # ValueError is what a closed stream raises, TypeError a sink
            # rejecting the data type
            story = self.story or default_storyteller()
            story.failure(
                "entry.write_failed",
                exc=exc,
                reason="Sink failed while writing the log entry",
                line=self.line,
            )
            if self.strict:
                raise LogWriteError(self.line, exc) from exc

    def _write(self, failure: BaseException | None) -> None:
        out = self.output
        emit = out.write
        if is_binary(out):

            def emit(text: str) -> None:
                out.write(text.encode("utf-8"))

        emit(f"{self.line} - ")

        if failure is not None:
            emit(" - PANIC!\n")

            for frame in capture_frames(failure, self.resolver, self.outer_frames):
                emit(frame.render())

        else:
            elapsed = self.clock() - self.start_time
            emit(format_duration(elapsed))

        emit("\n")

        if (flush := getattr(out, "flush", None)) is not None:
            flush()

        if self.close and (close := getattr(out, "close", None)) is not None:
            close()
