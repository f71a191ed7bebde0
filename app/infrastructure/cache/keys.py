"""Cache key builders. Single place for key format.

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_ENTITY


def entity_key(entity_id: int | str) -> str:
    """Cache key for an entity by id: entity:<id>."""
    component = str(entity_id)
    if not component or CACHE_KEY_SEP in component:
        raise ValueError(
            f"Cache key component 'entity_id' must be non-empty and not contain {CACHE_KEY_SEP!r}"
        )
    return f"{CACHE_PREFIX_ENTITY}{CACHE_KEY_SEP}{component}"
