"""
API dependencies for dependency injection.

The store handle is opened once in the application lifespan and kept on
``app.state.store``; repositories and services are built per request from it.
Tests replace the repository providers through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from adapters.mongo_adapter import MongoStore
from app.config import settings
from app.exceptions import StoreError, UnauthorizedError
from repositories import MealRepository, MealRequestRepository, UserRepository
from services import (
    MealCatalogService,
    PromotionService,
    RequestService,
    ReviewService,
    UserService,
    VoteService,
)


def get_store(request: Request) -> MongoStore:
    store = getattr(request.app.state, "store", None)
    if store is None or not store.is_connected:
        raise StoreError("Document store is not available")
    return store


# ------------------ Repositories ------------------
def get_meal_repository(store: MongoStore = Depends(get_store)) -> MealRepository:
    return MealRepository(store.collection(settings.meals_collection))


def get_upcoming_meal_repository(store: MongoStore = Depends(get_store)) -> MealRepository:
    return MealRepository(store.collection(settings.upcoming_meals_collection))


def get_meal_request_repository(store: MongoStore = Depends(get_store)) -> MealRequestRepository:
    return MealRequestRepository(store.collection(settings.meal_requests_collection))


def get_user_repository(store: MongoStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store.collection(settings.users_collection))


# ------------------ Services ------------------
def get_meal_vote_service(meals: MealRepository = Depends(get_meal_repository)) -> VoteService:
    return VoteService(meals, max_attempts=settings.vote_toggle_attempts, pool="meals")


def get_promotion_service(
    upcoming: MealRepository = Depends(get_upcoming_meal_repository),
    meals: MealRepository = Depends(get_meal_repository),
) -> PromotionService:
    votes = VoteService(upcoming, max_attempts=settings.vote_toggle_attempts, pool="upcoming")
    return PromotionService(
        upcoming, meals, votes, like_threshold=settings.promotion_like_threshold
    )


def get_review_service(meals: MealRepository = Depends(get_meal_repository)) -> ReviewService:
    return ReviewService(
        meals,
        rating_min=settings.review_rating_min,
        rating_max=settings.review_rating_max,
        max_attempts=settings.review_write_attempts,
    )


def get_request_service(
    requests: MealRequestRepository = Depends(get_meal_request_repository),
    meals: MealRepository = Depends(get_meal_repository),
) -> RequestService:
    return RequestService(requests, meals)


def get_meal_catalog(meals: MealRepository = Depends(get_meal_repository)) -> MealCatalogService:
    return MealCatalogService(meals, pool="meals")


def get_upcoming_catalog(
    upcoming: MealRepository = Depends(get_upcoming_meal_repository),
) -> MealCatalogService:
    return MealCatalogService(upcoming, pool="upcoming")


def get_user_service(users: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(users)


# ------------------ Auth ------------------
def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Reject requests without a bearer credential.

    Verifying the token and checking roles happens in front of this service.
    """
    if not authorization:
        raise UnauthorizedError("unauthorized Access")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("unauthorized Access")
    return token.strip()
