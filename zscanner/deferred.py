"""Deferred-value helpers for handler code running on the asyncio loop.

`with_callback` is a narrow adapter for callback-style APIs of the form
``register(cb)`` where ``cb(err=None, result=None)`` is called once. Prefer
native coroutines everywhere else.
"""
from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .domain.ordering import max_of

__all__ = [
    "Callback",
    "CallbackError",
    "with_callback",
    "sleep",
    "timed",
]

T = TypeVar("T")

Callback = Callable[..., None]


class CallbackError(RuntimeError):
    """Raised when a callback reports an error value that is not an exception."""

    def __init__(self, value: Any) -> None:
        super().__init__(str(value))
        self.value = value


def _as_exception(err: Any) -> BaseException:
    if isinstance(err, BaseException):
        return err
    return CallbackError(err)


def with_callback(register: Callable[[Callback], Any]) -> asyncio.Future[Any]:
    """Run ``register(cb)`` now and return a future for the outcome ``cb`` reports.

    - A truthy ``err`` fails the future; otherwise it resolves to ``result``
    - If ``register`` raises before calling back, that exception is the failure
    - Only the first report counts; later calls of ``cb`` are ignored

    Must be called from a coroutine running on the event loop.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def _callback(err: Any = None, result: Any = None) -> None:
        if future.done():
            return
        if err:
            future.set_exception(_as_exception(err))
        else:
            future.set_result(result)

    try:
        register(_callback)
    except Exception as exc:
        if not future.done():
            future.set_exception(exc)

    return future


async def sleep(ms: float) -> None:
    """Suspend the current task for at least ``ms`` milliseconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max_of(0, ms) / 1000.0
    while True:
        remaining = deadline - loop.time()
        if remaining <= 0:
            return
        # The loop may fire up to one clock tick early; go around again.
        await with_callback(lambda cb: loop.call_later(remaining, cb))


async def timed(fn: Callable[[], Awaitable[T]]) -> tuple[T, float]:
    """Await ``fn()`` and return ``(result, elapsed_ms)``.

    Exceptions from ``fn`` propagate unchanged.
    """
    start = time.perf_counter()
    result = await fn()
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return result, elapsed_ms
