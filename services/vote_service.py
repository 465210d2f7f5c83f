"""Vote ledger: per-meal set of voter identities with toggle semantics."""

from dataclasses import dataclass

from app.exceptions import ServiceValidationError, NotFoundError, ConflictError
from repositories.meal_repository import MealRepository
from services.base_service import BaseService


@dataclass(frozen=True)
class VoteResult:
    likes_count: int
    liked: bool


class VoteService(BaseService):
    """Toggles a voter in or out of a meal's ``likes`` set.

    Membership changes use the store's guarded ``$addToSet``/``$pull`` only, so
    a voter is never half-applied and concurrent voters never overwrite each
    other. The count returned is taken from the post-update document.
    """

    def __init__(self, meals: MealRepository, max_attempts: int = 3, pool: str = "meals"):
        super().__init__(f"unimeal.votes.{pool}")
        self.meals = meals
        self.max_attempts = max_attempts
        self.pool = pool

    def toggle(self, meal_id: str, voter_id: str) -> VoteResult:
        """Like the meal if ``voter_id`` has not, otherwise unlike it.

        Raises:
            ServiceValidationError: voter id is empty or not a string
            NotFoundError: meal does not exist
            ConflictError: concurrent toggles kept winning the race
        """
        if voter_id is not None and not isinstance(voter_id, str):
            raise ServiceValidationError("userId must be a string", details={"field": "userId"})
        voter_id = (voter_id or "").strip()
        if not voter_id:
            raise ServiceValidationError("userId is required to vote", details={"field": "userId"})

        meal = self.meals.get_by_id(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal {meal_id} not found")
        if not isinstance(meal.get("likes"), list):
            self.meals.init_likes(meal_id)

        for _ in range(self.max_attempts):
            likes = self.meals.add_like(meal_id, voter_id)
            if likes is not None:
                self.log_info("vote_added", pool=self.pool, meal_id=meal_id, voter=voter_id, likes=len(likes))
                return VoteResult(likes_count=len(likes), liked=True)

            likes = self.meals.remove_like(meal_id, voter_id)
            if likes is not None:
                self.log_info("vote_removed", pool=self.pool, meal_id=meal_id, voter=voter_id, likes=len(likes))
                return VoteResult(likes_count=len(likes), liked=False)

            # Neither guard matched: the meal is gone or another toggle by the
            # same voter landed between our two updates.
            if self.meals.get_by_id(meal_id) is None:
                raise NotFoundError(f"Meal {meal_id} not found")

        self.log_warning("vote_contended", pool=self.pool, meal_id=meal_id, voter=voter_id)
        raise ConflictError("Vote could not be applied, please retry", details={"mealId": meal_id})
