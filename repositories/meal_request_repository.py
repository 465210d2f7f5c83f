"""
Meal Request Repository - Data access layer for delivery requests
"""

from typing import Optional, Dict, Any
from datetime import datetime
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.exceptions import ConflictError
from domain.enums import RequestStatus
from repositories.base import MongoRepository


class MealRequestRepository(MongoRepository):
    """Repository for meal request data access"""

    def find_existing(self, meal_id: str, user_id: str, email: str) -> Optional[Dict[str, Any]]:
        """Any request for the exact (meal, requester, email) triple, whatever its status"""
        return self.from_document(
            self.collection.find_one({"mealId": meal_id, "userId": user_id, "email": email})
        )

    def insert(self, entity: Dict[str, Any]) -> str:
        """Insert a request; the unique index turns a racing duplicate into a conflict"""
        try:
            return super().insert(entity)
        except DuplicateKeyError as e:
            raise ConflictError(
                "You have already requested this meal",
                details={"mealId": entity.get("mealId")},
            ) from e

    def transition(
        self, request_id: Any, status: RequestStatus, now: datetime
    ) -> Optional[Dict[str, Any]]:
        """Move a pending request to a terminal status.

        Returns the updated request, or None when the request is absent or no
        longer pending.
        """
        flt = self.id_filter(request_id)
        if flt is None:
            return None
        doc = self.collection.find_one_and_update(
            {**flt, "status": RequestStatus.PENDING.value},
            {"$set": {"status": status.value, "updatedAt": now, status.stamp_field: now}},
            return_document=ReturnDocument.AFTER,
        )
        return self.from_document(doc)
