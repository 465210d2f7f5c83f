"""Upcoming meal routes: voting and promotion to the published pool.

The ``upcomming-meals`` spelling is part of the public API and is kept as is.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
import logging

from api.dependencies import get_promotion_service, get_upcoming_catalog, require_bearer_token
from api.responses import PaginatedResponse, paginated_response
from domain.enums import PromotionTrigger
from domain.schemas.meal_schemas import (
    MealCreate,
    MealOut,
    PublishResponse,
    UpcomingVoteResponse,
    VoteRequest,
)
from services import MealCatalogService, PromotionService

router = APIRouter(tags=["Upcoming Meals"])
logger = logging.getLogger("unimeal.api.upcoming")


@router.post(
    "/upcomming-meals",
    response_model=MealOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
def create_upcoming_meal(
    payload: MealCreate, catalog: MealCatalogService = Depends(get_upcoming_catalog)
):
    """Propose a meal for voting"""
    return catalog.create_meal(payload.model_dump(by_alias=True))


@router.get("/upcomming-meals", response_model=PaginatedResponse[MealOut])
def list_upcoming_meals(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    catalog: MealCatalogService = Depends(get_upcoming_catalog),
):
    result = catalog.list_meals(search=search, category=category, page=page, page_size=page_size)
    return paginated_response(result["items"], result["total"], page, page_size)


@router.get("/upcomming-meals/{meal_id}", response_model=MealOut)
def get_upcoming_meal(meal_id: str, catalog: MealCatalogService = Depends(get_upcoming_catalog)):
    return catalog.get_meal(meal_id)


@router.patch(
    "/upcomming-meals/like/{meal_id}",
    response_model=UpcomingVoteResponse,
    dependencies=[Depends(require_bearer_token)],
)
def toggle_upcoming_like(
    meal_id: str,
    body: VoteRequest,
    promotion: PromotionService = Depends(get_promotion_service),
):
    """Toggle a like; enough likes publish the meal in the same request"""
    outcome = promotion.toggle_vote(meal_id, body.user_id)
    return UpcomingVoteResponse(
        success=True,
        published=outcome.published,
        message=outcome.message,
        likes_count=outcome.likes_count,
        liked=outcome.liked,
    )


@router.post(
    "/publish-upcoming-meal/{meal_id}",
    response_model=PublishResponse,
    dependencies=[Depends(require_bearer_token)],
)
def publish_upcoming_meal(
    meal_id: str, promotion: PromotionService = Depends(get_promotion_service)
):
    """Publish an upcoming meal regardless of its likes"""
    promotion.promote(meal_id, PromotionTrigger.MANUAL)
    return PublishResponse(success=True, message="Meal published successfully")
