"""User management routes"""

from fastapi import APIRouter, Depends, status
import logging

from api.dependencies import get_user_service
from domain.schemas.user_schemas import UserCreate, UserCreated, UserOut
from services import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("unimeal.api.users")


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, users: UserService = Depends(get_user_service)):
    """Register a user; an email can only be registered once"""
    created = users.register(user.email, name=user.name, photo=user.photo, role=user.role.value)
    return UserCreated(inserted=True, user=UserOut.model_validate(created))


@router.get("/{email}", response_model=UserOut)
def get_user(email: str, users: UserService = Depends(get_user_service)):
    return UserOut.model_validate(users.get_by_email(email))
