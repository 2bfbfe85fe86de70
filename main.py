import asyncio

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from scopelog import LogEntryMiddleware


async def hello(request: Request):
    """Answer quickly, the entry shows a few hundred microseconds."""
    return PlainTextResponse("Hello, world!")


async def slow(request: Request):
    """Take a while, the entry shows the delay."""
    delay = float(request.query_params.get("delay", "0.25"))
    await asyncio.sleep(delay)
    return PlainTextResponse(f"Slept {delay}s")


async def boom(request: Request):
    """Fail, the entry shows PANIC! and the stack."""
    raise RuntimeError("Something went wrong")


app = Starlette(
    routes=[
        Route("/hello", hello),
        Route("/slow", slow),
        Route("/boom", boom),
    ],
    # Settings come from SCOPELOG_* environment variables
    middleware=[Middleware(LogEntryMiddleware)],
)
