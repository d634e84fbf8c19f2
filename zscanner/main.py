"""FastAPI app factory: request logging middleware and a health handler."""
from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request, Response

from zscanner import __version__
from zscanner.api import HttpContext, as_endpoint
from zscanner.config import Settings, load_settings
from zscanner.deferred import timed
from zscanner.logging_conf import get_logger, setup_logging

logger = get_logger("zscanner")
api_logger = get_logger("zscanner.api")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.debug_level)

    app = FastAPI(
        title="zscanner API",
        version=os.getenv("APP_VERSION", __version__),
    )
    app.state.settings = settings

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={
                "event": "startup",
                "env": settings.node_env,
                "authenticator": settings.authenticator,
                "document_storage": settings.document_storage,
            },
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        """One ``request.end`` record per request, timed with `timed`.

        The request line (method plus path and query) is the one context
        handlers see, so it matches the line in contained-error records.
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id
        line = HttpContext.from_request(request)
        fields = {
            "method": line.method,
            "url": line.url,
            "request_id": request_id,
            "env": settings.node_env,
        }

        try:
            response, elapsed_ms = await timed(lambda: call_next(request))
        except Exception:
            logger.exception("request.error", extra={"event": "request_error", **fields})
            raise

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                **fields,
            },
        )
        return response

    async def health(ctx: HttpContext) -> None:
        ctx.response.body = {"ok": True, "env": settings.node_env}

    router = APIRouter(prefix=settings.router_prefix)
    router.add_api_route(
        "/health",
        as_endpoint(api_logger, health),
        methods=["GET"],
        summary="Liveness/readiness check",
    )
    app.include_router(router)

    return app


# ASGI entrypoint for uvicorn: `uvicorn zscanner.main:app --port 10805`
app = create_app()
