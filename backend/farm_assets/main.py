"""Farm Assets API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The inventories router is registered before the farms router
    - Global error handlers map FarmAssetsError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Services initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farm_assets.api.dependencies import init_services
from farm_assets.api.error_handlers import register_error_handlers
from farm_assets.api.routes import farms, health, inventories
from farm_assets.config import get_settings
from farm_assets.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_services(settings)
    logger.info(f"{settings.app_name} started")
    yield
    logger.info(f"{settings.app_name} shutting down")


settings = get_settings()
app = FastAPI(
    title=settings.app_name, version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(inventories.router)
app.include_router(farms.router)

register_error_handlers(app)
