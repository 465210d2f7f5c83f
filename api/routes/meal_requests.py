"""Meal delivery request routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
import logging

from api.dependencies import get_request_service, require_bearer_token
from api.responses import PaginatedResponse, paginated_response
from domain.schemas.request_schemas import (
    MealRequestCreate,
    MealRequestCreated,
    MealRequestOut,
    MealRequestStatusResponse,
    MealRequestStatusUpdate,
)
from services import RequestService

router = APIRouter(tags=["Meal Requests"], dependencies=[Depends(require_bearer_token)])
logger = logging.getLogger("unimeal.api.requests")


@router.post(
    "/meals/{meal_id}/request",
    response_model=MealRequestCreated,
    status_code=status.HTTP_201_CREATED,
)
def request_meal(
    meal_id: str,
    body: MealRequestCreate,
    requests: RequestService = Depends(get_request_service),
):
    """Ask for a meal to be delivered; one request per meal and requester"""
    request_id = requests.create_request(
        meal_id,
        user_id=body.user_id,
        name=body.name,
        meal_name=body.meal_name,
        email=body.email,
        is_subscribed=body.is_subscribed,
    )
    return MealRequestCreated(message="Meal requested successfully", request_id=request_id)


@router.get("/meal-requests", response_model=PaginatedResponse[MealRequestOut])
def list_meal_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    email: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    requests: RequestService = Depends(get_request_service),
):
    result = requests.list_requests(status=status_filter, email=email, page=page, page_size=page_size)
    items = [MealRequestOut.model_validate(r) for r in result["items"]]
    return paginated_response(items, result["total"], page, page_size)


@router.get("/meal-requests/{request_id}", response_model=MealRequestOut)
def get_meal_request(request_id: str, requests: RequestService = Depends(get_request_service)):
    return MealRequestOut.model_validate(requests.get_request(request_id))


@router.patch("/meal-requests/{request_id}", response_model=MealRequestStatusResponse)
def update_meal_request_status(
    request_id: str,
    body: MealRequestStatusUpdate,
    requests: RequestService = Depends(get_request_service),
):
    """Mark a pending request delivered or cancelled"""
    updated = requests.set_status(request_id, body.status)
    return MealRequestStatusResponse(
        message=f"Meal request {updated['status']}",
        request=MealRequestOut.model_validate(updated),
    )
