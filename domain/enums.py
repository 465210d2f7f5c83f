"""
Domain enums for UniMeal application.
Contains all enumeration types used across the domain models.
"""

import enum


class RequestStatus(str, enum.Enum):
    """Delivery request states"""

    PENDING = "pending"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING

    @property
    def stamp_field(self) -> str:
        """Timestamp field set when a request enters this terminal state."""
        if self is RequestStatus.DELIVERED:
            return "approvedAt"
        if self is RequestStatus.CANCELLED:
            return "cancelledAt"
        return "requestedAt"


class PromotionTrigger(str, enum.Enum):
    """What caused an upcoming meal to be published"""

    MANUAL = "manual"
    AUTOMATIC = "automatic"


class UserRole(str, enum.Enum):
    """Account roles"""

    USER = "user"
    ADMIN = "admin"
