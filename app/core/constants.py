"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefix for entity existence markers / payloads (entity:<id>)
CACHE_PREFIX_ENTITY = "entity"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Layout of client-supplied timestamps in request bodies
CLIENT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
