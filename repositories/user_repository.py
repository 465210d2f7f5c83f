"""
User Repository - Data access layer for registered users
"""

from typing import Optional, Dict, Any
from pymongo.errors import DuplicateKeyError

from app.exceptions import ConflictError
from repositories.base import MongoRepository


class UserRepository(MongoRepository):
    """Repository for user data access"""

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get user by email"""
        return self.from_document(self.collection.find_one({"email": email}))

    def insert(self, entity: Dict[str, Any]) -> str:
        """Create a new user"""
        try:
            return super().insert(entity)
        except DuplicateKeyError as e:
            raise ConflictError(
                "user already exists", details={"email": entity.get("email")}
            ) from e
