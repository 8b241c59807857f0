"""Application lifespan: logging, tracing and the SQL engine.

Nothing here touches access decisions; the engine itself is created lazily by
the first request.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from edition_access.core.config import get_settings
from edition_access.infrastructure.persistence.database import dispose_engine, get_engine
from edition_access.shared.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging()

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup(
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
        )
        telemetry.instrument(app, get_engine())
        set_telemetry(telemetry)

    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
    await dispose_engine()
    logger.info("Database engine disposed")
