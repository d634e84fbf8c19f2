from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from .context import HttpContext, RequestContext

__all__ = [
    "ContextHandler",
    "describe_error",
    "wrap_route_with_error_handler",
    "as_endpoint",
]

ContextHandler = Callable[[RequestContext], Awaitable[None]]


def describe_error(err: BaseException) -> str:
    """Display form of an error: its message, or its class name when empty."""
    return str(err) or type(err).__name__


def wrap_route_with_error_handler(
    log: logging.Logger, handler: ContextHandler
) -> ContextHandler:
    """Wrap a context handler so that it never raises.

    On failure the response becomes ``500`` with message ``"Error: <err>"`` and
    one info record is logged with the error attached as ``extra["error"]``.
    On success the context is left alone and nothing is logged.
    """

    async def wrapped(ctx: RequestContext) -> None:
        try:
            await handler(ctx)
        except Exception as err:
            text = describe_error(err)
            ctx.response.status = 500
            ctx.response.message = "Error: " + text
            log.info(f"Error {text} processing {ctx.method} {ctx.url}", extra={"error": err})

    return wrapped


def as_endpoint(
    log: logging.Logger, handler: ContextHandler
) -> Callable[[Request], Awaitable[Response]]:
    """Expose a context handler as a FastAPI endpoint with error containment.

    A failing handler's partial body and headers are dropped so the client
    always sees the plain-text ``Error: ...`` message.
    """

    async def discard_partial(ctx: HttpContext) -> None:
        try:
            await handler(ctx)
        except Exception:
            ctx.response.body = None
            ctx.response.headers.clear()
            raise

    wrapped = wrap_route_with_error_handler(log, discard_partial)

    async def endpoint(request: Request) -> Response:
        ctx = HttpContext.from_request(request)
        await wrapped(ctx)
        return ctx.render()

    endpoint.__name__ = getattr(handler, "__name__", endpoint.__name__)
    return endpoint
