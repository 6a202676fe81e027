"""Thryv API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ThryvError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Both stores initialized on startup and released on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - The two stores are opened independently; no cross-store transaction exists
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thryv.api.error_handlers import register_error_handlers
from thryv.api.routes import companies, customers, health
from thryv.config import get_settings
from thryv.infrastructure.database import close_db, init_db
from thryv.infrastructure.dynamodb import close_kv, init_kv
from thryv.infrastructure.observability import setup_logging

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
    await init_kv(
        settings.dynamodb_table_company,
        region_name=settings.dynamodb_region,
        endpoint_url=settings.dynamodb_endpoint,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )
    logger.info("Thryv API started")
    yield
    await close_kv()
    await close_db()
    logger.info("Thryv API shutting down")


app = FastAPI(title="Thryv API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(companies.router)

register_error_handlers(app)
