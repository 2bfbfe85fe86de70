from dataclasses import dataclass
from typing import Any

from starlette.types import Scope


@dataclass(frozen=True, slots=True)
class WorkUnit:
    """What a log entry is about, e.g. ``GET /hello``."""

    method: str
    target: str

    def __str__(self) -> str:
        return f"{self.method} {self.target}"

    @classmethod
    def from_scope(cls, scope: Scope) -> "WorkUnit":
        """Describe an ASGI http scope. The query string is kept, like a raw request line."""
        target = scope.get("raw_path") or scope.get("path", "/")
        if isinstance(target, bytes):
            target = target.decode("latin-1")

        if query := scope.get("query_string"):
            target = f"{target}?{query.decode('latin-1')}"

        return cls(method=scope.get("method", "GET"), target=target)

    @classmethod
    def describe(cls, work: Any) -> "WorkUnit":
        """
        Accept a WorkUnit, an ASGI scope, or any object exposing 'method'
        plus one of 'target', 'path' or 'url' (a Starlette Request qualifies).
        """
        if isinstance(work, WorkUnit):
            return work

        if isinstance(work, dict):
            return cls.from_scope(work)

        method = getattr(work, "method")
        for attr in ("target", "path", "url"):
            if (target := getattr(work, attr, None)) is not None:
                break
        else:
            raise TypeError(
                f"{type(work).__name__} has no 'target', 'path' or 'url' to describe"
            )

        # starlette.datastructures.URL
        if (path := getattr(target, "path", None)) is not None:
            query = getattr(target, "query", "")
            target = f"{path}?{query}" if query else path

        return cls(method=str(method), target=str(target))
