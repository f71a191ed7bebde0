"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown wiring. Builds the Database, the
Redis CacheService and the EntityCoordinator, stores them on app.state,
and releases connections on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.entity_coordinator import EntityCoordinator
from app.core.config import Settings, get_settings
from app.domain.enums import CacheMode
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.entity_store import SqlEntityStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: database (and tables), Redis cache (if enabled),
    coordinator, telemetry (if enabled). Shutdown order: telemetry,
    cache disconnect, database engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    database = Database.from_settings(settings)
    app.state.cache = None
    try:
        await _startup(app, settings, database)
        yield
    finally:
        await _shutdown(app, database)


async def _startup(app: FastAPI, settings: Settings, database: Database) -> None:
    """Build tables, cache, coordinator and telemetry. Shutdown runs even if this raises."""
    if settings.database_create_tables:
        await database.create_tables()
    app.state.database = database
    app.state.entity_store = SqlEntityStore(database)

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled; entity reads go to the store")

    app.state.entity_coordinator = EntityCoordinator(
        app.state.entity_store,
        app.state.cache,
        ttl=settings.cache_ttl_entity,
        cache_mode=CacheMode(settings.entity_cache_mode),
        accept_client_timestamps=settings.accept_client_timestamps,
    )
    logger.info(
        "Entity coordinator ready (cache_mode=%s, ttl=%ss)",
        settings.entity_cache_mode,
        settings.cache_ttl_entity,
    )

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument(app, database.engine)
        set_telemetry(telemetry)
        logger.info("Telemetry initialized")


async def _shutdown(app: FastAPI, database: Database) -> None:
    """Release telemetry, Redis and the engine pool, whichever were set up."""
    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()

    app.state.entity_coordinator = None
    await database.dispose()
