"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.base import CamelModel
from domain.schemas.meal_schemas import (
    MealCreate,
    MealOut,
    VoteRequest,
    VoteResponse,
    UpcomingVoteResponse,
    PublishResponse,
)
from domain.schemas.review_schemas import (
    ReviewCreate,
    ReviewUpdate,
    Review,
    ReviewMutationResponse,
    UserReview,
    UserReviewsResponse,
)
from domain.schemas.request_schemas import (
    MealRequestCreate,
    MealRequestCreated,
    MealRequestStatusUpdate,
    MealRequestOut,
    MealRequestStatusResponse,
)
from domain.schemas.user_schemas import UserCreate, UserOut, UserCreated

__all__ = [
    "CamelModel",
    # Meal schemas
    "MealCreate",
    "MealOut",
    "VoteRequest",
    "VoteResponse",
    "UpcomingVoteResponse",
    "PublishResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "Review",
    "ReviewMutationResponse",
    "UserReview",
    "UserReviewsResponse",
    # Request schemas
    "MealRequestCreate",
    "MealRequestCreated",
    "MealRequestStatusUpdate",
    "MealRequestOut",
    "MealRequestStatusResponse",
    # User schemas
    "UserCreate",
    "UserOut",
    "UserCreated",
]
