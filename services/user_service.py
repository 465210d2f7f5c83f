"""User Service"""

from typing import Any, Dict

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from repositories.user_repository import UserRepository
from services.base_service import BaseService


class UserService(BaseService):
    def __init__(self, users: UserRepository):
        super().__init__("unimeal.users")
        self.users = users

    def register(self, email: str, name: str = None, photo: str = None, role: str = "user") -> Dict[str, Any]:
        """Register a user once per email"""
        email = (email or "").strip().lower()
        if not email:
            raise ServiceValidationError("email is required", details={"field": "email"})
        if self.users.get_by_email(email) is not None:
            self.log_warning("user_exists", email=email)
            raise ConflictError("user already exists", details={"email": email})

        user = {"email": email, "name": name, "photo": photo, "role": role, "createdAt": self.now()}
        user["id"] = self.users.insert(user)
        self.log_info("user_registered", email=email, user_id=user["id"])
        return user

    def get_by_email(self, email: str) -> Dict[str, Any]:
        user = self.users.get_by_email((email or "").strip().lower())
        if user is None:
            raise NotFoundError(f"User {email} not found")
        return user
