from typing import Any, Protocol

# Every record carries at least:
#     time_ns: int  # timestamp in nanoseconds since epoch (time.time_ns())
#     event: str  # event type: "entry.write_failed", "request.error" etc

type LogRecord = dict[str, Any]


class StoryListener(Protocol):
    """Protocol for diagnostics destinations."""

    def enqueue(self, record: LogRecord) -> None:
        """Hand a record to the listener."""
        ...
