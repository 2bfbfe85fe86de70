class ScopelogError(Exception):
    """Base class for all scopelog errors."""


class LogWriteError(ScopelogError):
    """The sink failed while a log entry was being written."""

    def __init__(self, line: str, cause: BaseException) -> None:
        self.line = line
        self.cause = cause
        super().__init__(f"Failed to write log entry '{line}': {cause}")
