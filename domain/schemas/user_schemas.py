"""Schemas for registered users"""

from typing import Optional
from datetime import datetime
from pydantic import Field

from domain.enums import UserRole
from domain.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Payload for registering a user"""

    email: str = Field(..., min_length=3, description="Login email, unique")
    name: Optional[str] = Field(None, description="Display name")
    photo: Optional[str] = Field(None, description="Avatar URL")
    role: UserRole = Field(default=UserRole.USER)


class UserOut(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None


class UserCreated(CamelModel):
    inserted: bool = True
    user: UserOut
