"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready.

    The store must be reachable for readiness; the cache is reported but
    optional (the service degrades to store-only without it).
    """

    status: str = Field(default="ok", description="Readiness status")
    store: str = Field(..., description="'ok' or 'unavailable'")
    cache: str = Field(..., description="'ok', 'unavailable' or 'disabled'")
