"""Schemas for meal reviews.

Field types, presence and rating bounds are enforced by ReviewService so that
a malformed field answers 400 like every other invalid argument.
"""

from typing import Optional, Any, Dict, List
from datetime import datetime
from pydantic import Field

from domain.schemas.base import CamelModel


class ReviewCreate(CamelModel):
    """Body of POST /meals/{id}/review"""

    user_id: Any = None
    rating: Any = None
    comment: Any = None
    name: Any = None
    email: Any = None
    meal_name: Any = None
    likes: Any = Field(
        None, description="Like context of the meal at the time of reviewing"
    )


class ReviewUpdate(CamelModel):
    """Body of a review edit"""

    rating: Any = None
    comment: Any = None


class Review(CamelModel):
    """A review as stored inside its meal"""

    review_id: Optional[str] = None
    user_id: str
    name: str
    email: str
    rating: float
    comment: str
    meal_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewMutationResponse(CamelModel):
    """Response of add/edit/remove review"""

    success: bool = True
    message: str
    meal: Dict[str, Any]


class UserReview(Review):
    """A review listed outside of its meal"""

    meal_id: str
    index: int


class UserReviewsResponse(CamelModel):
    total: int
    reviews: List[UserReview]
