"""HTTP presentation layer (FastAPI routers)."""
