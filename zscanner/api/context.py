from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

__all__ = [
    "ResponseFields",
    "RequestContext",
    "ResponseState",
    "HttpContext",
]


class ResponseFields(Protocol):
    status: int
    message: str


class RequestContext(Protocol):
    """What a context handler sees: the request line and a mutable response."""

    method: str
    url: str
    response: ResponseFields


@dataclass
class ResponseState:
    """Mutable response a handler fills in before it is rendered."""

    status: int = 200
    message: str = ""
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


@dataclass
class HttpContext:
    """RequestContext backed by a FastAPI/Starlette request."""

    request: Request
    method: str
    url: str
    response: ResponseState = field(default_factory=ResponseState)

    @classmethod
    def from_request(cls, request: Request) -> HttpContext:
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        return cls(request=request, method=request.method, url=url)

    def render(self) -> Response:
        """Turn the response state into a concrete response.

        - No body: the message (or the status reason phrase) as plain text
        - ``str`` body as plain text, ``bytes`` as-is, anything else as JSON
        """
        state = self.response
        body = state.body
        if body is None:
            out: Response = PlainTextResponse(
                state.message or _reason(state.status), status_code=state.status
            )
        elif isinstance(body, str):
            out = PlainTextResponse(body, status_code=state.status)
        elif isinstance(body, (bytes, bytearray)):
            out = Response(content=bytes(body), status_code=state.status)
        else:
            out = JSONResponse(content=body, status_code=state.status)
        for name, value in state.headers.items():
            out.headers[name] = value
        return out
