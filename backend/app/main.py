"""ASGI entry-point for the FastAPI application.

This module
1. instantiates the :class:`fastapi.FastAPI` application;
2. builds the database engine (one connection pool per process) and
   attaches it to ``app.state``;
3. wires the API routers located in ``app.api``; and
4. registers global exception handlers and the CORS middleware.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.config import Settings, settings as default_settings
from app.db.database import build_engine
from app.exceptions import AppBaseException
from app.logging_config import setup_logging


# ---------------------------------------------------------------------------
# Logging must be configured as soon as possible so that any errors during
# import/start-up are captured.
# ---------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:  # noqa: D401
    """Wire and return the FastAPI application instance.

    ``engine`` may be supplied by the caller (tests do); otherwise one is
    built from ``settings.DATABASE_URL``.  Either way the application owns
    it from then on and disposes of it at shutdown.
    """

    settings = settings or default_settings

    app = FastAPI(
        title="Transcript Gateway API",
        version="0.1.0",
        docs_url="/api/docs",
    )
    app.state.settings = settings
    app.state.engine = engine or build_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
    )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @app.on_event("startup")
    async def _startup() -> None:  # noqa: D401
        logger.info(
            "Transcript gateway starting (pool size %s, allowed origin %s)",
            settings.DB_POOL_SIZE,
            settings.FRONTEND_URL,
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # noqa: D401
        logger.info("Disposing database engine")
        app.state.engine.dispose()

    # ------------------------------------------------------------------
    # Exception handlers – every error body has the shape {"error": ...}
    # ------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(  # noqa: D401
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.error("Request validation error: %s", exc.errors())
        return JSONResponse(status_code=422, content={"error": "Invalid request", "detail": exc.errors()})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(  # noqa: D401
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.error("HTTP exception %s: %s", exc.status_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(AppBaseException)
    async def _app_error_handler(  # noqa: D401
        request: Request,
        exc: AppBaseException,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.error("Application exception on %s: %s", request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def _generic_error_handler(  # noqa: D401
        request: Request,
        exc: Exception,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ------------------------------------------------------------------
    # Middleware – a single trusted frontend origin, never a wildcard.
    # ------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Routers
    # ------------------------------------------------------------------

    app.include_router(api_router, prefix="/api")

    # ------------------------------------------------------------------
    # Miscellaneous endpoints
    # ------------------------------------------------------------------

    @app.get("/", response_class=PlainTextResponse)
    async def _root() -> str:  # noqa: D401
        return "Transcript gateway is running."

    @app.get("/api/health")
    async def _health() -> dict[str, str]:  # noqa: D401
        return {"status": "ok"}

    return app


# Instantiate at import time so `uvicorn app.main:app` works.
app: FastAPI = create_app()


def run() -> None:
    """Serve :data:`app` with uvicorn on the configured host and port."""
    import uvicorn

    logger.info("Starting API server on %s:%s", default_settings.HOST, default_settings.PORT)
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
