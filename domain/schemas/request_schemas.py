"""Schemas for meal delivery requests"""

from typing import Any, Optional
from datetime import datetime
from pydantic import Field

from domain.schemas.base import CamelModel


class MealRequestCreate(CamelModel):
    """Body of POST /meals/{meal_id}/request. Validated by RequestService."""

    user_id: Any = None
    name: Any = None
    meal_name: Any = None
    email: Any = None
    is_subscribed: Any = False


class MealRequestCreated(CamelModel):
    success: bool = True
    message: str
    request_id: str


class MealRequestStatusUpdate(CamelModel):
    """Body of PATCH /meal-requests/{id}. Validated by RequestService."""

    status: Any = Field(None, description="delivered or cancelled")


class MealRequestOut(CamelModel):
    """A stored delivery request"""

    id: str
    meal_id: str
    meal_name: str
    user_id: str
    name: str
    email: str
    is_subscribed: bool = False
    status: str
    requested_at: datetime
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None


class MealRequestStatusResponse(CamelModel):
    success: bool = True
    message: str
    request: MealRequestOut
