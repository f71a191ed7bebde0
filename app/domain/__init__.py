"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import CacheMode, Provenance
from app.domain.exceptions import (
    CacheException,
    DuplicateEmailException,
    EntityNotFoundException,
    ServiceException,
    StoreReadException,
    StoreWriteException,
    ValidationException,
)

__all__ = [
    # Enums
    "CacheMode",
    "Provenance",
    # Exceptions
    "CacheException",
    "DuplicateEmailException",
    "EntityNotFoundException",
    "ServiceException",
    "StoreReadException",
    "StoreWriteException",
    "ValidationException",
]
