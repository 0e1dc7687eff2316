"""Refinery API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RefineryError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured once on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from refinery.api.error_handlers import register_error_handlers
from refinery.api.routes import derivations, health
from refinery.config import get_settings
from refinery.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Refinery API started")
    yield
    logger.info("Refinery API shutting down")


app = FastAPI(title="Refinery API", version="0.1.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(derivations.router)

register_error_handlers(app)
