from typing import Any, Mapping, Optional


class UniMealError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(UniMealError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class UnauthorizedError(UniMealError):
    """Raised when the caller presents no usable credential."""

    http_status = 401
    default_message = "Unauthorized"


class NotFoundError(UniMealError):
    """Raised when a requested meal, review, request or user does not exist."""

    http_status = 404
    default_message = "Not found"


class ConflictError(UniMealError):
    """Raised on duplicates and on writes that lost a race against another writer."""

    http_status = 409
    default_message = "Conflict"


class StoreError(UniMealError):
    """Raised when the document store could not complete an operation."""

    http_status = 500
    default_message = "A database error occurred"


class PromotionIncompleteError(StoreError):
    """The published copy exists but the upcoming original could not be removed.

    Re-running the promotion for the same upcoming id completes the move.
    """

    default_message = "Promotion did not complete"
