"""Entity lookup service with a write-invalidated Redis cache."""
