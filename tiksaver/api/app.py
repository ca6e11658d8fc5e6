"""FastAPI application factory.

Lifespan
--------
On startup the app installs the log handler and makes sure both media
directories exist.  On shutdown it closes the shared HTTP client (and with
it the cookie jar).

Routers
-------
    /            — batch download of the configured posts
    /downloads   — batch download of posts given in the request body

Unknown paths answer ``404`` with a plain-text ``Not Found`` body.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from tiksaver import __version__
from tiksaver.config import settings
from tiksaver.logging_config import configure_logging
from tiksaver.scraper.session import close_client

from tiksaver.api.routers import downloads as downloads_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Set up logging and media directories on startup; release HTTP resources on shutdown."""
    configure_logging()
    settings.ensure_media_dirs()
    try:
        yield
    finally:
        close_client()


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return PlainTextResponse("Not Found", status_code=404)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="tiksaver",
        description="Saves public TikTok videos and photo posts to local storage.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)

    app.include_router(downloads_router.router, tags=["downloads"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn tiksaver.api.app:app
app = create_app()
