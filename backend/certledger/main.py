"""CertLedger API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CertLedgerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - World state initialized on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from certledger.api.error_handlers import register_error_handlers
from certledger.api.routes import (
    certificate_schemas, certificates, health, ledger, transactions, universities,
)
from certledger.config import get_settings
from certledger.infrastructure.observability import setup_logging
from certledger.infrastructure.world_state import WorldStateManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    world_state = WorldStateManager(
        settings.world_state_url,
        pool_size=settings.world_state_pool_size,
        max_overflow=settings.world_state_max_overflow,
    )
    if settings.world_state_create_tables:
        await world_state.create_tables()
    app.state.world_state = world_state
    logger.info("CertLedger API started")
    yield
    logger.info("CertLedger API shutting down")
    await world_state.dispose()


def create_app() -> FastAPI:
    """Build the FastAPI application with routes and handlers registered."""
    app = FastAPI(title="CertLedger API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(ledger.router)
    app.include_router(certificates.router)
    app.include_router(universities.router)
    app.include_router(certificate_schemas.router)
    app.include_router(transactions.router)

    register_error_handlers(app)
    return app


app = create_app()
