"""localesync API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LocaleSyncError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from localesync.api.error_handlers import register_error_handlers
from localesync.api.routes import (
    card_musicas, categoria_de_musicas, health, locales,
)
from localesync.config import get_settings
from localesync.infrastructure.database import init_db
from localesync.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("localesync API started")
    yield
    logger.info("localesync API shutting down")


app = FastAPI(title="localesync API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(locales.router)
app.include_router(card_musicas.router)
app.include_router(categoria_de_musicas.router)

register_error_handlers(app)
