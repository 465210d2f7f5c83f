"""
Request lifecycle: pending -> delivered | cancelled.

Both outcomes are terminal. A transition is a single conditional update from
``pending``, so a terminal request keeps its original ``approvedAt`` or
``cancelledAt`` no matter how many status changes are attempted afterwards.
"""

from typing import Any, Dict, List, Optional

from app.exceptions import ServiceValidationError, NotFoundError, ConflictError
from domain.enums import RequestStatus
from repositories.meal_repository import MealRepository
from repositories.meal_request_repository import MealRequestRepository
from services.base_service import BaseService


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class RequestService(BaseService):
    """Creates delivery requests and moves them to a terminal state"""

    def __init__(self, requests: MealRequestRepository, meals: MealRepository):
        super().__init__("unimeal.requests")
        self.requests = requests
        self.meals = meals

    def create_request(
        self,
        meal_id: str,
        user_id: Optional[str],
        name: Optional[str],
        meal_name: Optional[str],
        email: Optional[str],
        is_subscribed: bool = False,
    ) -> str:
        """Create a pending request and return its id.

        One request per (meal, requester, email) ever: an earlier request
        blocks a new one even after it was cancelled.

        Raises:
            ServiceValidationError: a required field is missing or mistyped
            NotFoundError: the meal is not published
            ConflictError: the requester already requested this meal
        """
        fields = {"userId": user_id, "name": name, "mealName": meal_name, "email": email}
        missing = [field for field, value in fields.items() if _blank(value)]
        if missing:
            raise ServiceValidationError(
                "Missing required request fields", details={"missing": missing}
            )
        not_text = [field for field, value in fields.items() if not isinstance(value, str)]
        if not_text:
            raise ServiceValidationError(
                "Request fields must be strings", details={"invalid": not_text}
            )
        if is_subscribed is None:
            is_subscribed = False
        if not isinstance(is_subscribed, bool):
            raise ServiceValidationError(
                "isSubscribed must be a boolean", details={"field": "isSubscribed"}
            )

        if self.meals.get_by_id(meal_id) is None:
            raise NotFoundError(f"Meal {meal_id} not found")

        existing = self.requests.find_existing(meal_id, user_id, email)
        if existing is not None:
            self.log_warning(
                "duplicate_request", meal_id=meal_id, user_id=user_id, status=existing.get("status")
            )
            raise ConflictError(
                "You have already requested this meal",
                details={"mealId": meal_id, "requestId": existing["id"], "status": existing.get("status")},
            )

        request_id = self.requests.insert(
            {
                "mealId": meal_id,
                "mealName": meal_name,
                "userId": user_id,
                "name": name,
                "email": email,
                "isSubscribed": is_subscribed,
                "status": RequestStatus.PENDING.value,
                "requestedAt": self.now(),
            }
        )
        self.log_info("request_created", request_id=request_id, meal_id=meal_id, user_id=user_id)
        return request_id

    @staticmethod
    def parse_status(status: Any) -> RequestStatus:
        """Accept only the terminal statuses a request can be moved to"""
        try:
            parsed = RequestStatus(status)
        except (ValueError, TypeError):
            parsed = None
        if parsed is None or not parsed.is_terminal:
            raise ServiceValidationError(
                "status must be 'delivered' or 'cancelled'",
                details={"field": "status", "value": status},
            )
        return parsed

    def set_status(self, request_id: str, status: Any) -> Dict[str, Any]:
        """Move a pending request to ``delivered`` or ``cancelled``.

        Raises:
            ServiceValidationError: status is not delivered/cancelled
            NotFoundError: no such request
            ConflictError: the request is already delivered or cancelled
        """
        target = self.parse_status(status)
        updated = self.requests.transition(request_id, target, self.now())
        if updated is not None:
            self.log_info("request_transitioned", request_id=request_id, status=target.value)
            return updated

        current = self.requests.get_by_id(request_id)
        if current is None:
            raise NotFoundError(f"Meal request {request_id} not found")
        self.log_warning(
            "request_already_terminal", request_id=request_id, status=current.get("status"), requested=target.value
        )
        raise ConflictError(
            f"Meal request is already {current.get('status')}",
            details={"requestId": request_id, "status": current.get("status")},
        )

    def get_request(self, request_id: str) -> Dict[str, Any]:
        request = self.requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError(f"Meal request {request_id} not found")
        return request

    def list_requests(
        self,
        status: Optional[str] = None,
        email: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Dict[str, Any]:
        """Paginated requests, optionally filtered by status and requester email"""
        query: Dict[str, Any] = {}
        if status:
            try:
                query["status"] = RequestStatus(status).value
            except ValueError:
                raise ServiceValidationError(
                    "Unknown request status", details={"field": "status", "value": status}
                )
        if email:
            query["email"] = email
        page = max(page, 1)
        items: List[Dict[str, Any]] = self.requests.list(
            query, skip=(page - 1) * page_size, limit=page_size, sort=[("requestedAt", -1)]
        )
        return {"items": items, "total": self.requests.count(query)}
