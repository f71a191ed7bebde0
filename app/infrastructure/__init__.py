"""Infrastructure: SQL persistence and Redis cache adapters."""
