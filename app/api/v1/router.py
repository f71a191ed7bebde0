"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import entities, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(entities.router, prefix="/entities", tags=["entities"])
