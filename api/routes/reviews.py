"""Review routes.

Reviews can be addressed by their stable ``reviewId`` or, on the older
``/user/reviews`` and ``/admin/reviews`` paths, by their current position in
the meal's review list.
"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_review_service, require_bearer_token
from domain.schemas.review_schemas import (
    ReviewCreate,
    ReviewMutationResponse,
    ReviewUpdate,
    UserReviewsResponse,
)
from services import ReviewService

router = APIRouter(tags=["Reviews"], dependencies=[Depends(require_bearer_token)])
logger = logging.getLogger("unimeal.api.reviews")


@router.post("/meals/{meal_id}/review", response_model=ReviewMutationResponse)
def add_review(
    meal_id: str, body: ReviewCreate, reviews: ReviewService = Depends(get_review_service)
):
    meal = reviews.add_review(
        meal_id,
        user_id=body.user_id,
        rating=body.rating,
        comment=body.comment,
        name=body.name,
        email=body.email,
        meal_name=body.meal_name,
        likes=body.likes,
    )
    return ReviewMutationResponse(message="Review added successfully", meal=meal)


# ------------------ Stable id ------------------
@router.put("/meals/{meal_id}/reviews/{review_id}", response_model=ReviewMutationResponse)
def update_review(
    meal_id: str,
    review_id: str,
    body: ReviewUpdate,
    reviews: ReviewService = Depends(get_review_service),
):
    meal = reviews.update_review(meal_id, review_id, rating=body.rating, comment=body.comment)
    return ReviewMutationResponse(message="Review updated successfully", meal=meal)


@router.delete("/meals/{meal_id}/reviews/{review_id}", response_model=ReviewMutationResponse)
def delete_review(
    meal_id: str, review_id: str, reviews: ReviewService = Depends(get_review_service)
):
    meal = reviews.remove_review(meal_id, review_id)
    return ReviewMutationResponse(message="Review deleted successfully", meal=meal)


# ------------------ Positional ------------------
@router.put("/user/reviews/{meal_id}/{index}", response_model=ReviewMutationResponse)
def update_review_at(
    meal_id: str,
    index: str,
    body: ReviewUpdate,
    reviews: ReviewService = Depends(get_review_service),
):
    meal = reviews.update_review_at(meal_id, index, rating=body.rating, comment=body.comment)
    return ReviewMutationResponse(message="Review updated successfully", meal=meal)


@router.delete("/user/reviews/{meal_id}/{index}", response_model=ReviewMutationResponse)
def delete_review_at(
    meal_id: str, index: str, reviews: ReviewService = Depends(get_review_service)
):
    meal = reviews.remove_review_at(meal_id, index)
    return ReviewMutationResponse(message="Review deleted successfully", meal=meal)


@router.delete("/admin/reviews/{meal_id}/{review_index}", response_model=ReviewMutationResponse)
def admin_delete_review(
    meal_id: str, review_index: str, reviews: ReviewService = Depends(get_review_service)
):
    meal = reviews.remove_review_at(meal_id, review_index)
    logger.info("admin_review_removed meal_id=%s index=%s", meal_id, review_index)
    return ReviewMutationResponse(message="Review removed by admin", meal=meal)


@router.get("/user/reviews/{email}", response_model=UserReviewsResponse)
def list_user_reviews(email: str, reviews: ReviewService = Depends(get_review_service)):
    found = reviews.list_reviews_by_user(email)
    return UserReviewsResponse(total=len(found), reviews=found)
