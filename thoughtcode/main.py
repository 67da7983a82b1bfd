"""ThoughtCode API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ThoughtCodeError → structured JSON responses
    - CORS permissive (all origins, the five methods the API uses) unless overridden by settings
    - Responses over 500 bytes gzip-compressed for clients that accept it
    - Database and enrichment client initialized on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created from ORM metadata on startup when DATABASE_CREATE_TABLES is set
      (no migration tooling)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from thoughtcode.api.error_handlers import register_error_handlers
from thoughtcode.api.routes import health, questions
from thoughtcode.config import get_settings
from thoughtcode.infrastructure.database import init_db, close_db
from thoughtcode.infrastructure.enrichment_client import (
    init_enrichment_client, close_enrichment_client,
)
from thoughtcode.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    client = init_enrichment_client(
        settings.enrichment_url, settings.enrichment_timeout_seconds,
    )
    if client is None:
        logger.info("Enrichment disabled (ENRICHMENT_URL not set)")
    logger.info("ThoughtCode API started")
    yield
    logger.info("ThoughtCode API shutting down")
    await close_enrichment_client()
    await close_db()


app = FastAPI(
    title="ThoughtCode API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_methods,
    allow_headers=["*"],
    expose_headers=[questions.ENRICHMENT_STATUS_HEADER],
)
app.add_middleware(GZipMiddleware, minimum_size=500)

app.include_router(health.router)
app.include_router(questions.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app on the configured address and port."""
    settings = get_settings()
    uvicorn.run(
        "thoughtcode.main:app",
        host=settings.http_address,
        port=settings.http_port,
    )


if __name__ == "__main__":
    run()
