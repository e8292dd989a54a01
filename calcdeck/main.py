"""Calcdeck API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CalcdeckError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and calculator catalog loaded on startup via lifespan;
      a broken calculator definition stops startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calcdeck.api.error_handlers import register_error_handlers
from calcdeck.api.routes import (
    admin_categories, admin_subcategories, calculators, guides, health, units,
)
from calcdeck.config import get_settings
from calcdeck.infrastructure.database import close_db, init_db
from calcdeck.infrastructure.observability import setup_logging
from calcdeck.services.calculator_catalog import get_catalog

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
    catalog = get_catalog()
    logger.info(f"Calcdeck API started with {len(catalog.configs)} calculators")
    yield
    await close_db()
    logger.info("Calcdeck API shutting down")


app = FastAPI(
    title="Calcdeck API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(calculators.router)
app.include_router(units.router)
app.include_router(guides.router)
app.include_router(admin_categories.router)
app.include_router(admin_subcategories.router)

register_error_handlers(app)
