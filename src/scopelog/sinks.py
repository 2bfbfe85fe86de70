import io
import sys
import threading
import weakref
from typing import IO, Callable, Protocol

from rich.console import Console

from scopelog.config import Settings


class Sink(Protocol):
    """
    Anything a log entry can be written to, text or binary.

    Binary sinks are handed UTF-8 bytes. 'flush' and 'close' are optional,
    the recorder calls them when present.
    """

    def write(self, data: str | bytes, /) -> object: ...


def is_binary(out: object) -> bool:
    """Whether 'out' takes bytes rather than text (BytesIO, sys.stdout.buffer, sockets)."""
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(out, io.TextIOBase):
        return False
    mode = getattr(out, "mode", "")
    return isinstance(mode, str) and "b" in mode


# Used for streams that cannot be weakly referenced
_fallback_lock = threading.Lock()
_locks_guard = threading.Lock()
_stream_locks: "weakref.WeakKeyDictionary[object, threading.Lock]" = (
    weakref.WeakKeyDictionary()
)


def stream_lock(stream: object) -> threading.Lock:
    """The lock shared by every buffered sink writing to 'stream'."""
    with _locks_guard:
        try:
            lock = _stream_locks.get(stream)
            if lock is None:
                lock = _stream_locks[stream] = threading.Lock()
        except TypeError:
            return _fallback_lock
    return lock


class BufferedSink:
    """
    Collects an entry in memory and hands it to 'stream' in one write.

    Give one of these to every recorder sharing a stream across threads:
    entries come out whole instead of interleaved. Sinks on the same stream
    share a lock, sinks on different streams do not wait for each other.
    """

    def __init__(self, stream: IO, lock: "threading.Lock | None" = None):
        self.stream = stream
        self.lock = lock or stream_lock(stream)
        self._buffer = io.StringIO()

    def write(self, text: str) -> int:
        return self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def flush(self) -> None:
        text = self._buffer.getvalue()
        if not text:
            return

        data = text.encode("utf-8") if is_binary(self.stream) else text
        with self.lock:
            self.stream.write(data)
            self.stream.flush()

        self._buffer = io.StringIO()

    def close(self) -> None:
        self.flush()


class ConsoleSink:
    """Writes through a Rich console, without markup or highlighting."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def write(self, text: str) -> int:
        self.console.out(text, end="", highlight=False)
        return len(text)

    def flush(self) -> None:
        self.console.file.flush()


def stream_sink_factory(settings: Settings) -> Callable[[], Sink]:
    """
    Build a factory for sinks on the stream selected by the settings.

    The stream is looked up at call time so redirected stdout/stderr are honoured.
    """

    def factory() -> Sink:
        stream: IO = getattr(sys, settings.stream)
        if settings.buffered:
            return BufferedSink(stream)
        return stream

    return factory
