"""
Meal Repository - Data access for both meal pools (published and upcoming).

Vote and review writes are single per-document updates so that concurrent
requests never interleave inside one logical change.
"""

from typing import List, Optional, Dict, Any
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from repositories.base import MongoRepository


class MealRepository(MongoRepository):
    """Repository for one meal pool"""

    def insert_if_absent(self, meal: Dict[str, Any]) -> bool:
        """Insert a meal keeping its id.

        Returns False when a document with that id already exists, which is how
        a re-run promotion recognises an earlier, partially finished one.
        """
        try:
            self.collection.insert_one(self.to_document(meal))
        except DuplicateKeyError:
            return False
        return True

    # ------------------ Votes ------------------
    def init_likes(self, meal_id: Any) -> bool:
        """Give a legacy meal without a likes array an empty one"""
        flt = self.id_filter(meal_id)
        if flt is None:
            return False
        result = self.collection.update_one(
            {**flt, "likes": {"$not": {"$type": "array"}}},
            {"$set": {"likes": []}},
        )
        return result.modified_count == 1

    def add_like(self, meal_id: Any, voter_id: str) -> Optional[List[str]]:
        """Add a voter if absent; returns the new likes, or None if nothing matched"""
        return self._toggle(meal_id, {"likes": {"$ne": voter_id}}, {"$addToSet": {"likes": voter_id}})

    def remove_like(self, meal_id: Any, voter_id: str) -> Optional[List[str]]:
        """Remove a voter if present; returns the new likes, or None if nothing matched"""
        return self._toggle(meal_id, {"likes": voter_id}, {"$pull": {"likes": voter_id}})

    def _toggle(self, meal_id, guard, update) -> Optional[List[str]]:
        flt = self.id_filter(meal_id)
        if flt is None:
            return None
        doc = self.collection.find_one_and_update(
            {**flt, **guard},
            update,
            projection={"likes": 1},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return list(doc.get("likes") or [])

    # ------------------ Reviews ------------------
    def write_reviews(
        self,
        meal_id: Any,
        expected_version: int,
        reviews: List[Dict[str, Any]],
        rating: float,
        review_count: int,
    ) -> Optional[Dict[str, Any]]:
        """Replace reviews and their aggregate in one update.

        The write only applies if ``reviewsVersion`` still equals
        ``expected_version`` (a missing counter counts as 0). Returns the
        updated meal, or None when another writer got there first.
        """
        flt = self.id_filter(meal_id)
        if flt is None:
            return None
        if expected_version == 0:
            version_guard = {"reviewsVersion": {"$in": [0, None]}}
        else:
            version_guard = {"reviewsVersion": expected_version}
        doc = self.collection.find_one_and_update(
            {**flt, **version_guard},
            {
                "$set": {
                    "reviews": reviews,
                    "rating": rating,
                    "reviewCount": review_count,
                    "reviewsVersion": expected_version + 1,
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        return self.from_document(doc)

    def find_reviews_by_email(self, email: str) -> List[Dict[str, Any]]:
        """Meals (id, title, reviews) holding at least one review by ``email``"""
        cursor = self.collection.find(
            {"reviews.email": email}, projection={"title": 1, "reviews": 1}
        )
        return [self.from_document(doc) for doc in cursor]
