"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import IEntityStore
from app.application.interfaces.services import ICacheService

__all__ = [
    "ICacheService",
    "IEntityStore",
]
