from datetime import datetime

from rich.console import Console, Group
from rich.text import Text
from rich.traceback import Traceback

from scopelog.storyteller.types import LogRecord


def event_color(record: LogRecord) -> str:
    if record.get("error") == "system":
        return "red"
    return "green"


class RichListener:
    """Rich console output, one line per record, tracebacks for exceptions."""

    def __init__(self, console: Console | None = None, max_frames: int = 2):
        self.console = console or Console(stderr=True)
        self.max_frames = max_frames

    def enqueue(self, record: LogRecord) -> None:
        self.console.print(self._build_record(record))

    def _build_record(self, record: LogRecord) -> Group:
        line = Text()

        timestamp = datetime.fromtimestamp(record["time_ns"] / 1_000_000_000)
        line.append(f"{timestamp.strftime('%H:%M:%S.%f')[:-3]} ", style="grey70")

        event = record.get("event", "")
        line.append(f"{event:18} ", style=event_color(record))

        exceptions = []
        for key, value in record.items():
            if key in ("time_ns", "event"):
                continue

            if isinstance(value, BaseException):
                exc = value
                exceptions.append(
                    Traceback.from_exception(
                        type(exc),
                        exc,
                        exc.__traceback__,
                        width=self.console.width,
                        max_frames=self.max_frames,
                    )
                )
                continue

            if value is None:
                continue

            line.append(f" {key}={value} ", style="grey70")

        return Group(line, *exceptions)
