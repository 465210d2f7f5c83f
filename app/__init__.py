"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    UniMealError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    StoreError,
    PromotionIncompleteError,
)

__all__ = [
    "settings",
    "UniMealError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "StoreError",
    "PromotionIncompleteError",
]
