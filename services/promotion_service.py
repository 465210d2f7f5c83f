"""
Promotion state machine: Upcoming -> Published.

A promotion is a move between two collections without a multi-document
transaction, run as two idempotent phases keyed by the upcoming meal's id:

1. insert the meal into the published pool under the same id (an existing
   copy means an earlier attempt got this far and is left untouched);
2. delete the meal from the upcoming pool.

If phase 2 fails the caller gets ``PromotionIncompleteError``; running the
promotion again finishes the move without creating a second published copy.
There is no Published -> Upcoming transition.
"""

from dataclasses import dataclass
from typing import Any, Dict

from pymongo.errors import PyMongoError

from app.exceptions import NotFoundError, PromotionIncompleteError
from domain.enums import PromotionTrigger
from repositories.meal_repository import MealRepository
from services.base_service import BaseService
from services.vote_service import VoteService


@dataclass(frozen=True)
class PromotionOutcome:
    likes_count: int
    liked: bool
    published: bool

    @property
    def message(self) -> str:
        if self.published:
            return "Meal reached the like threshold and has been published"
        if self.liked:
            return "Meal liked"
        return "Meal unliked"


class PromotionService(BaseService):
    """Publishes upcoming meals manually or when they collect enough likes"""

    def __init__(
        self,
        upcoming: MealRepository,
        published: MealRepository,
        votes: VoteService,
        like_threshold: int = 10,
    ):
        super().__init__("unimeal.promotion")
        self.upcoming = upcoming
        self.published = published
        self.votes = votes
        self.like_threshold = like_threshold

    def should_promote(self, liked: bool, likes_count: int) -> bool:
        """Automatic promotion fires only on a like that reaches the threshold"""
        return liked and likes_count >= self.like_threshold

    def promote(self, upcoming_id: str, trigger: PromotionTrigger = PromotionTrigger.MANUAL) -> Dict[str, Any]:
        """Move an upcoming meal into the published pool and return the published copy.

        Manual promotion keeps the document as it is; automatic promotion
        stamps a fresh ``createdAt``.

        Raises:
            NotFoundError: the meal is not in the upcoming pool
            PromotionIncompleteError: published, but the upcoming original remains
        """
        meal = self.upcoming.get_by_id(upcoming_id)
        if meal is None:
            raise NotFoundError(f"Upcoming meal {upcoming_id} not found")

        now = self.now()
        published = dict(meal)
        if trigger is PromotionTrigger.AUTOMATIC:
            published["createdAt"] = now
        published["promotedFrom"] = upcoming_id
        published["promotedAt"] = now
        published["promotionTrigger"] = trigger.value

        inserted = self.published.insert_if_absent(published)
        if not inserted:
            self.log_warning("promotion_resumed", upcoming_id=upcoming_id, trigger=trigger.value)
            published = self.published.get_by_id(upcoming_id) or published

        try:
            removed = self.upcoming.delete(upcoming_id)
        except PyMongoError as exc:
            self.log_error("promotion_incomplete", upcoming_id=upcoming_id, error=exc)
            raise PromotionIncompleteError(
                "Meal was published but could not be removed from upcoming meals",
                details={"upcomingId": upcoming_id},
            ) from exc
        if not removed:
            # A concurrent promotion of the same meal finished phase 2 first.
            self.log_info("promotion_already_completed", upcoming_id=upcoming_id)

        self.log_info(
            "meal_promoted",
            upcoming_id=upcoming_id,
            trigger=trigger.value,
            likes=len(published.get("likes") or []),
        )
        return published

    def toggle_vote(self, upcoming_id: str, voter_id: str) -> PromotionOutcome:
        """Toggle a vote on an upcoming meal and publish it if the threshold is met"""
        result = self.votes.toggle(upcoming_id, voter_id)
        published = False
        if self.should_promote(result.liked, result.likes_count):
            try:
                self.promote(upcoming_id, PromotionTrigger.AUTOMATIC)
                published = True
            except NotFoundError:
                # Another voter's request promoted it between our toggle and now.
                published = self.published.get_by_id(upcoming_id) is not None
        return PromotionOutcome(
            likes_count=result.likes_count, liked=result.liked, published=published
        )
