"""Schemas for meals, upcoming meals, votes and promotion"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import ConfigDict, Field

from domain.schemas.base import CamelModel


class MealCreate(CamelModel):
    """Payload for adding a meal to either pool"""

    title: str = Field(..., min_length=1, description="Meal title")
    category: str = Field(..., min_length=1, description="breakfast, lunch, dinner ...")
    description: Optional[str] = Field(None, description="Free text description")
    price: float = Field(..., ge=0, description="Price per serving")
    image: Optional[str] = Field(None, description="Image URL")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient names")
    distributor_name: Optional[str] = Field(None, description="Who serves the meal")
    distributor_email: Optional[str] = Field(None, description="Distributor contact")


class VoteRequest(CamelModel):
    """Body of a like toggle"""

    user_id: Any = Field(None, description="Identity of the voter")


class VoteResponse(CamelModel):
    """Result of a like toggle on a published meal"""

    likes_count: int
    liked: bool


class UpcomingVoteResponse(CamelModel):
    """Result of a like toggle on an upcoming meal"""

    success: bool = True
    published: bool
    message: str
    likes_count: int
    liked: bool


class PublishResponse(CamelModel):
    """Result of a manual promotion"""

    success: bool = True
    message: str


class MealOut(CamelModel):
    """A meal as served from either pool.

    Unknown stored fields (promotion stamps, legacy keys) are passed through.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    distributor_name: Optional[str] = None
    distributor_email: Optional[str] = None
    likes: List[str] = Field(default_factory=list)
    reviews: List[Dict[str, Any]] = Field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    created_at: Optional[datetime] = None
