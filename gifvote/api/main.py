"""FastAPI application factory.

``create_app`` builds the application with its dependencies injected. Tests
pass a GifService wired to fakes; in production the service is left out and
the lifespan builds it from configuration.

Application lifecycle (production):
  1. Startup: configure logging, migrate the SQLite schema (resetting it to
     fixtures outside production), open the async engine and the Giphy HTTP
     client, store the GifService in app.state
  2. Runtime: handle HTTP requests, serve the static bundle
  3. Shutdown: close the HTTP client, dispose of the engine

If startup fails the exception is logged and re-raised, so uvicorn exits
without ever binding its port.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import httpx
import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from gifvote.api.routers import gifs_router, topics_router
from gifvote.config import constants
from gifvote.infra.db import create_engine
from gifvote.infra.giphy import GiphyClient
from gifvote.infra.migrate import run_migrations
from gifvote.infra.repositories import GifRepository
from gifvote.services import GifService


def configure_logging() -> None:
    """Configure structlog for structured JSON output.

    Sets up stdlib logging at the configured level so that third-party
    libraries (uvicorn, httpx, alembic) emit through the same pipeline as
    application code. All output is serialised as JSON to stdout.
    """
    log_level = getattr(logging, constants.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the GifService unless one was injected, and tear it down on exit.

    Startup:
      - Configure structured logging
      - Run migrations (reset to fixtures unless APP_ENV=production)
      - Create the async engine and the shared httpx client
      - Store the GifService in app.state for dependency injection

    Shutdown:
      - Close the httpx client and dispose of the engine
    """
    if app.state.gif_service is not None:
        yield
        return

    configure_logging()

    log = structlog.get_logger().bind(
        service=constants.SERVICE_NAME,
        component="api",
    )

    log.info(
        "api.startup.migrating",
        database_path=constants.DATABASE_PATH,
        app_env=constants.APP_ENV,
        reset=not constants.IS_PRODUCTION,
    )

    try:
        await asyncio.to_thread(
            run_migrations,
            constants.DATABASE_SYNC_URL,
            not constants.IS_PRODUCTION,
        )
    except Exception as exc:
        log.error(
            "api.startup.failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise

    engine = create_engine(constants.DATABASE_URL)
    http = httpx.AsyncClient(timeout=constants.GIPHY_TIMEOUT_SECONDS)

    app.state.gif_service = GifService(
        repository=GifRepository(engine),
        giphy=GiphyClient(
            http,
            api_key=constants.GIPHY_API_KEY,
            base_url=constants.GIPHY_BASE_URL,
        ),
    )

    log.info("api.startup.complete", port=constants.PORT)

    # Application runs here (yield control to FastAPI)
    try:
        yield
    finally:
        log.info("api.shutdown.closing")
        app.state.gif_service = None
        await http.aclose()
        await engine.dispose()
        log.info("api.shutdown.complete")


def create_app(
    gif_service: Optional[GifService] = None,
    public_dir: Optional[Path] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        gif_service: Pre-built service. When None, the lifespan builds one from
                     configuration at startup.
        public_dir:  Directory of the static front-end bundle. Defaults to
                     PUBLIC_DIR.

    Returns:
        The configured application. Safe to call repeatedly; nothing is
        shared between instances.
    """
    app = FastAPI(
        title="gifvote",
        description="Giphy proxy with topic caching and GIF voting.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.gif_service = gif_service

    # Register routers
    app.include_router(topics_router)
    app.include_router(gifs_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": constants.SERVICE_NAME}

    # Mounted last so API routes take precedence over same-named files.
    app.mount(
        "/",
        StaticFiles(
            directory=public_dir if public_dir is not None else constants.PUBLIC_DIR,
            html=True,
            check_dir=False,
        ),
        name="public",
    )

    return app
