"""Domain enumerations for the entity service."""

from enum import Enum


class Provenance(str, Enum):
    """Where a read result was satisfied from.

    CACHE means a cache entry existed for the id (the store may still have
    been consulted for content); STORE means the cache missed.
    """

    CACHE = "cache"
    STORE = "store"


class CacheMode(str, Enum):
    """Shape of the value stored under entity:<id>."""

    MARKER = "marker"
    CONTENT = "content"
