"""Services package - Business logic layer"""

from services.vote_service import VoteService, VoteResult
from services.review_service import ReviewService, compute_rating
from services.promotion_service import PromotionService, PromotionOutcome
from services.request_service import RequestService
from services.meal_service import MealCatalogService
from services.user_service import UserService

__all__ = [
    "VoteService",
    "VoteResult",
    "ReviewService",
    "compute_rating",
    "PromotionService",
    "PromotionOutcome",
    "RequestService",
    "MealCatalogService",
    "UserService",
]
