"""Health check endpoints: liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_cache, get_entity_store
from app.application.interfaces.repositories import IEntityStore
from app.infrastructure.cache.redis_cache import CacheService
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Store unreachable", "model": ReadinessResponse}},
)
async def readiness_check(
    store: Annotated[IEntityStore | None, Depends(get_entity_store)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the store answers; 503 otherwise. Cache state is informational."""
    store_ok = store is not None and await store.ping()
    if cache is None:
        cache_status = "disabled"
    else:
        cache_status = "ok" if await cache.ping() else "unavailable"
    result = ReadinessResponse(
        status="ok" if store_ok else "not_ready",
        store="ok" if store_ok else "unavailable",
        cache=cache_status,
    )
    if store_ok:
        return result
    return JSONResponse(status_code=503, content=result.model_dump())
