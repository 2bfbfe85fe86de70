from scopelog.config import Settings
from scopelog.duration import format_duration
from scopelog.errors import LogWriteError, ScopelogError
from scopelog.frames import StackFrame, Symbol, capture_frames
from scopelog.middleware import LogEntryMiddleware
from scopelog.recorder import LogEntry
from scopelog.sinks import BufferedSink, ConsoleSink, Sink
from scopelog.work import WorkUnit

__all__ = [
    "BufferedSink",
    "ConsoleSink",
    "LogEntry",
    "LogEntryMiddleware",
    "LogWriteError",
    "ScopelogError",
    "Settings",
    "Sink",
    "StackFrame",
    "Symbol",
    "WorkUnit",
    "capture_frames",
    "format_duration",
]
