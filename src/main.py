"""FastAPI application entry point — wires everything together.

Usage:
    python -m src.main

Loads the benefits catalog on startup and serves the questionnaire pages
and the matching API.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from src.audit import audit_on_event
from src.config import settings
from src.data.catalog import BenefitCatalog
from src.events import add_sink, remove_sink, start_event_system, stop_event_system
from src.web.routes import router
from src.web.sessions import SessionStore

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)


def create_app(catalog: BenefitCatalog | None = None) -> FastAPI:
    """Build the app. Tests pass their own catalog; production reads settings."""
    if catalog is None:
        catalog = BenefitCatalog(
            settings.data.benefits_data_source,
            timeout=settings.data.data_timeout,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup and shutdown lifecycle."""
        logger.info("Starting benefits screener (env=%s)", settings.environment)

        # 1. Event feed + audit trail
        add_sink(audit_on_event)
        await start_event_system()

        # 2. Benefits data; a failure is shown to users with a retry button
        status = await catalog.load()
        logger.info("Benefits catalog %s (%d records)", status.value, len(catalog.records))

        try:
            yield
        finally:
            logger.info("Shutting down benefits screener...")
            await stop_event_system()
            remove_sink(audit_on_event)

        logger.info("Benefits screener shutdown complete")

    app = FastAPI(
        title=settings.web.app_title,
        description="Questionnaire-driven benefits eligibility screener",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.catalog = catalog
    app.state.sessions = SessionStore(
        max_sessions=settings.web.max_sessions,
        idle_timeout=settings.web.session_idle_timeout,
    )
    app.include_router(router)
    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.web.host,
        port=settings.web.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
