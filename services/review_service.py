"""
Rating aggregator: a meal's ordered reviews and the derived
(rating, reviewCount) pair.

Every mutation recomputes the aggregate over the whole review list and writes
``reviews``, ``rating`` and ``reviewCount`` together in a single update guarded
by the meal's ``reviewsVersion`` counter. Readers therefore always see
``rating == round(mean(ratings), 1)`` and ``reviewCount == len(reviews)``, and
two concurrent edits can never silently drop one another.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
from numbers import Number
import uuid

from app.exceptions import ServiceValidationError, NotFoundError, ConflictError
from repositories.meal_repository import MealRepository
from services.base_service import BaseService

REQUIRED_REVIEW_FIELDS = ("userId", "rating", "comment", "name", "email", "mealName")

Mutation = Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]


def compute_rating(reviews: List[Dict[str, Any]]) -> Tuple[float, int]:
    """Mean rating rounded to one decimal, and the review count.

    >>> compute_rating([{"rating": 4}, {"rating": 5}])
    (4.5, 2)
    >>> compute_rating([])
    (0.0, 0)
    """
    if not reviews:
        return 0.0, 0
    total = sum(float(r.get("rating") or 0) for r in reviews)
    return round(total / len(reviews), 1), len(reviews)


def new_review_id() -> str:
    return uuid.uuid4().hex


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class ReviewService(BaseService):
    """Adds, edits and removes reviews while keeping the aggregate exact"""

    def __init__(
        self,
        meals: MealRepository,
        rating_min: float = 1,
        rating_max: float = 5,
        max_attempts: int = 3,
    ):
        super().__init__("unimeal.reviews")
        self.meals = meals
        self.rating_min = rating_min
        self.rating_max = rating_max
        self.max_attempts = max_attempts

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def _check_rating(self, rating: Any) -> float:
        if isinstance(rating, bool) or not isinstance(rating, Number):
            raise ServiceValidationError("rating must be a number", details={"field": "rating"})
        if not self.rating_min <= rating <= self.rating_max:
            raise ServiceValidationError(
                f"rating must be between {self.rating_min} and {self.rating_max}",
                details={"field": "rating", "value": rating},
            )
        return rating

    @staticmethod
    def _check_index(reviews: List[Dict[str, Any]], index: Any) -> int:
        # Path segments arrive as text
        if isinstance(index, str):
            try:
                index = int(index.strip())
            except ValueError:
                raise ServiceValidationError(
                    "Review index must be an integer", details={"index": index}
                )
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(reviews):
            raise ServiceValidationError(
                f"Review index {index} is out of range",
                details={"index": index, "reviewCount": len(reviews)},
            )
        return index

    @staticmethod
    def _position_of(reviews: List[Dict[str, Any]], review_id: str) -> int:
        for position, review in enumerate(reviews):
            if review.get("reviewId") == review_id:
                return position
        raise NotFoundError(f"Review {review_id} not found", details={"reviewId": review_id})

    # ------------------------------------------------------------------
    # Core write path
    # ------------------------------------------------------------------

    def _apply(self, meal_id: str, mutate: Mutation, retry: bool) -> Dict[str, Any]:
        """Read, mutate, recompute and conditionally write the review list.

        ``retry`` is only safe when ``mutate`` locates reviews by stable id;
        positional mutations must not be replayed on a list that changed.
        """
        attempts = self.max_attempts if retry else 1
        for attempt in range(1, attempts + 1):
            meal = self.meals.get_by_id(meal_id)
            if meal is None:
                raise NotFoundError(f"Meal {meal_id} not found")

            reviews = [dict(r) for r in (meal.get("reviews") or [])]
            for review in reviews:
                if not review.get("reviewId"):
                    review["reviewId"] = new_review_id()
            version = int(meal.get("reviewsVersion") or 0)

            updated_reviews = mutate(reviews)
            rating, review_count = compute_rating(updated_reviews)
            updated = self.meals.write_reviews(
                meal_id, version, updated_reviews, rating, review_count
            )
            if updated is not None:
                return updated
            self.log_warning("review_write_conflict", meal_id=meal_id, attempt=attempt)

        raise ConflictError(
            "Reviews changed while saving, please reload and retry",
            details={"mealId": meal_id},
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add_review(
        self,
        meal_id: str,
        user_id: Optional[str] = None,
        rating: Any = None,
        comment: Optional[str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        meal_name: Optional[str] = None,
        likes: Any = None,
    ) -> Dict[str, Any]:
        """Append a review and return the updated meal"""
        values = {
            "userId": user_id,
            "rating": rating,
            "comment": comment,
            "name": name,
            "email": email,
            "mealName": meal_name,
        }
        missing = [field for field in REQUIRED_REVIEW_FIELDS if _is_blank(values[field])]
        if not likes:
            missing.append("likes")
        if missing:
            raise ServiceValidationError(
                "Missing required review fields", details={"missing": missing}
            )
        not_text = [
            field for field in REQUIRED_REVIEW_FIELDS
            if field != "rating" and not isinstance(values[field], str)
        ]
        if not_text:
            raise ServiceValidationError(
                "Review fields must be strings", details={"invalid": not_text}
            )
        self._check_rating(rating)

        review = {
            "reviewId": new_review_id(),
            "userId": user_id,
            "name": name,
            "email": email,
            "rating": rating,
            "comment": comment,
            "mealName": meal_name,
            "createdAt": self.now(),
        }
        meal = self._apply(meal_id, lambda reviews: reviews + [review], retry=True)
        self.log_info(
            "review_added",
            meal_id=meal_id,
            review_id=review["reviewId"],
            rating=meal.get("rating"),
            count=meal.get("reviewCount"),
        )
        return meal

    def _edit(self, rating: Any, comment: Optional[str]) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
        if rating is None and comment is None:
            raise ServiceValidationError("Nothing to update: provide rating and/or comment")
        if rating is not None:
            self._check_rating(rating)
        if comment is not None and (not isinstance(comment, str) or _is_blank(comment)):
            raise ServiceValidationError("comment must be a non-empty string", details={"field": "comment"})
        now = self.now()

        def edit(review: Dict[str, Any]) -> Dict[str, Any]:
            changed = dict(review)
            if rating is not None:
                changed["rating"] = rating
            if comment is not None:
                changed["comment"] = comment
            changed["updatedAt"] = now
            return changed

        return edit

    def update_review_at(self, meal_id: str, index: Any, rating: Any = None, comment: Optional[str] = None) -> Dict[str, Any]:
        """Edit the review currently at ``index``"""
        edit = self._edit(rating, comment)

        def mutate(reviews):
            position = self._check_index(reviews, index)
            return reviews[:position] + [edit(reviews[position])] + reviews[position + 1:]

        meal = self._apply(meal_id, mutate, retry=False)
        self.log_info("review_updated", meal_id=meal_id, index=index, rating=meal.get("rating"))
        return meal

    def update_review(self, meal_id: str, review_id: str, rating: Any = None, comment: Optional[str] = None) -> Dict[str, Any]:
        """Edit a review by its stable id"""
        edit = self._edit(rating, comment)

        def mutate(reviews):
            position = self._position_of(reviews, review_id)
            return reviews[:position] + [edit(reviews[position])] + reviews[position + 1:]

        meal = self._apply(meal_id, mutate, retry=True)
        self.log_info("review_updated", meal_id=meal_id, review_id=review_id, rating=meal.get("rating"))
        return meal

    def remove_review_at(self, meal_id: str, index: Any) -> Dict[str, Any]:
        """Remove the review currently at ``index``"""

        def mutate(reviews):
            position = self._check_index(reviews, index)
            return reviews[:position] + reviews[position + 1:]

        meal = self._apply(meal_id, mutate, retry=False)
        self.log_info("review_removed", meal_id=meal_id, index=index, count=meal.get("reviewCount"))
        return meal

    def remove_review(self, meal_id: str, review_id: str) -> Dict[str, Any]:
        """Remove a review by its stable id"""

        def mutate(reviews):
            position = self._position_of(reviews, review_id)
            return reviews[:position] + reviews[position + 1:]

        meal = self._apply(meal_id, mutate, retry=True)
        self.log_info("review_removed", meal_id=meal_id, review_id=review_id, count=meal.get("reviewCount"))
        return meal

    def list_reviews_by_user(self, email: str) -> List[Dict[str, Any]]:
        """Reviews written by ``email`` across published meals, newest first"""
        if _is_blank(email):
            raise ServiceValidationError("email is required", details={"field": "email"})
        found = []
        for meal in self.meals.find_reviews_by_email(email):
            for position, review in enumerate(meal.get("reviews") or []):
                if review.get("email") == email:
                    found.append({**review, "mealId": meal["id"], "index": position})
        found.sort(key=lambda r: (r.get("createdAt") is not None, r.get("createdAt")), reverse=True)
        return found
