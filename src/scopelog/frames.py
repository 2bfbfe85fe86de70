import sys
import traceback
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Callable, Iterator

UNKNOWN = "<unknown>"
NOT_UTF8 = "<not-utf8>"
NO_LINE = "??"


@dataclass(frozen=True, slots=True)
class Symbol:
    """One resolver result for a frame. Every field may be missing."""

    name: str | bytes | None = None
    filename: str | bytes | None = None
    lineno: int | None = None


@dataclass(frozen=True, slots=True)
class StackFrame:
    number: int
    address: int
    name: str
    filename: str
    line: str

    def render(self) -> str:
        return (
            f"{self.number:>4} - 0x{self.address:x} - {self.name}\n"
            f"       {self.filename}:{self.line}\n"
        )


type Resolver = Callable[[FrameType, int | None], list[Symbol]]


def resolve(frame: FrameType, lineno: int | None) -> list[Symbol]:
    """Resolve a frame using its code object."""
    code = frame.f_code
    return [
        Symbol(
            name=getattr(code, "co_qualname", None) or code.co_name or None,
            filename=code.co_filename or None,
            lineno=lineno,
        )
    ]


def frame_address(frame: FrameType) -> int:
    # The code object identity plays the role of an instruction address.
    return id(frame.f_code)


def as_text(value: str | bytes | None) -> str:
    if value is None:
        return UNKNOWN

    try:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        # Lone surrogates (e.g. from undecodable file names) are not valid text
        value.encode("utf-8")
    except UnicodeError:
        return NOT_UTF8

    return value


def walk_stack(
    tb: TracebackType | None, outer: bool = True
) -> Iterator[tuple[FrameType, int | None]]:
    """
    Walk from the point of failure outward.

    Yields the traceback entries innermost first and then, if 'outer' is set,
    the frames that called the outermost traceback frame, down to the bottom
    of the stack. Without a traceback the caller's own stack is walked.
    """
    if tb is None:
        caller = sys._getframe(1)
        yield from traceback.walk_stack(caller)
        return

    entries = list(traceback.walk_tb(tb))
    yield from reversed(entries)

    if outer:
        # walk_stack(None) would start from the current frame, guard it
        if (parent := entries[0][0].f_back) is not None:
            yield from traceback.walk_stack(parent)


def capture_frames(
    failure: BaseException | None,
    resolver: Resolver = resolve,
    outer: bool = True,
) -> Iterator[StackFrame]:
    """
    Produce numbered frames for a failure, one per resolved symbol.

    Missing or malformed symbol data is replaced with sentinels, so this
    never fails because debug information is unavailable.
    """
    tb = failure.__traceback__ if failure is not None else None

    for number, (frame, lineno) in enumerate(walk_stack(tb, outer), start=1):
        address = frame_address(frame)

        try:
            symbols = resolver(frame, lineno)
        except Exception:
            # A broken resolver should not cut the trace short
            symbols = [Symbol()]

        for symbol in symbols:
            yield StackFrame(
                number=number,
                address=address,
                name=as_text(symbol.name),
                filename=as_text(symbol.filename),
                line=str(symbol.lineno) if symbol.lineno is not None else NO_LINE,
            )
