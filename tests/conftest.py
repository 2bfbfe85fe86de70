"""
Pytest configuration and fixtures.
Shared sinks, clocks and storytellers.
"""

import io

import pytest

from scopelog.storyteller import LogRecord, Storyteller


class CollectingListener:
    """Keeps every record it is handed."""

    def __init__(self):
        self.records: list[LogRecord] = []

    def enqueue(self, record: LogRecord) -> None:
        self.records.append(record)

    def events(self) -> list[str]:
        return [record["event"] for record in self.records]


class FailingSink:
    """Accepts 'fail_after' writes and then raises OSError."""

    def __init__(self, fail_after: int = 0):
        self.fail_after = fail_after
        self.written: list[str] = []

    def write(self, text: str) -> int:
        if len(self.written) >= self.fail_after:
            raise OSError("disk full")
        self.written.append(text)
        return len(text)


def fixed_clock(*values: int):
    """A clock returning 'values' in order."""
    return iter(values).__next__


@pytest.fixture
def listener():
    return CollectingListener()


@pytest.fixture
def story(listener):
    return Storyteller([listener])


@pytest.fixture
def sink():
    return io.StringIO()


@pytest.fixture
def failing_sink():
    return FailingSink


@pytest.fixture
def clock():
    return fixed_clock
