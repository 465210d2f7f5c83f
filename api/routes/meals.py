"""Published meal routes: browsing and likes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
import logging

from api.dependencies import get_meal_catalog, get_meal_vote_service, require_bearer_token
from api.responses import PaginatedResponse, paginated_response
from domain.schemas.meal_schemas import MealCreate, MealOut, VoteRequest, VoteResponse
from services import MealCatalogService, VoteService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("unimeal.api.meals")


@router.post(
    "",
    response_model=MealOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
def create_meal(payload: MealCreate, catalog: MealCatalogService = Depends(get_meal_catalog)):
    """Add a meal directly to the published pool"""
    return catalog.create_meal(payload.model_dump(by_alias=True))


@router.get("", response_model=PaginatedResponse[MealOut])
def list_meals(
    search: Optional[str] = Query(None, description="Case-insensitive title search"),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    catalog: MealCatalogService = Depends(get_meal_catalog),
):
    """List published meals"""
    result = catalog.list_meals(search=search, category=category, page=page, page_size=page_size)
    return paginated_response(result["items"], result["total"], page, page_size)


@router.get("/{meal_id}", response_model=MealOut)
def get_meal(meal_id: str, catalog: MealCatalogService = Depends(get_meal_catalog)):
    return catalog.get_meal(meal_id)


@router.post(
    "/{meal_id}/like",
    response_model=VoteResponse,
    dependencies=[Depends(require_bearer_token)],
)
def toggle_like(
    meal_id: str,
    body: VoteRequest,
    votes: VoteService = Depends(get_meal_vote_service),
):
    """Like the meal, or unlike it if the user already liked it"""
    result = votes.toggle(meal_id, body.user_id)
    return VoteResponse(likes_count=result.likes_count, liked=result.liked)
