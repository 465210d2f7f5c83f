"""Meal catalogue: adding and browsing meals in either pool"""

from typing import Any, Dict, Optional
import re

from app.exceptions import NotFoundError
from repositories.meal_repository import MealRepository
from services.base_service import BaseService


class MealCatalogService(BaseService):
    """Create/read access to one meal pool"""

    def __init__(self, meals: MealRepository, pool: str = "meals"):
        super().__init__(f"unimeal.catalog.{pool}")
        self.meals = meals
        self.pool = pool

    def create_meal(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new meal with empty engagement state"""
        meal = {
            **data,
            "likes": [],
            "reviews": [],
            "rating": 0.0,
            "reviewCount": 0,
            "reviewsVersion": 0,
            "createdAt": self.now(),
        }
        meal["id"] = self.meals.insert(meal)
        self.log_info("meal_created", pool=self.pool, meal_id=meal["id"], title=meal.get("title"))
        return meal

    def get_meal(self, meal_id: str) -> Dict[str, Any]:
        meal = self.meals.get_by_id(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal {meal_id} not found", details={"pool": self.pool})
        return meal

    def list_meals(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Dict[str, Any]:
        """Paginated meals, with case-insensitive title search"""
        query: Dict[str, Any] = {}
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}
        if category:
            query["category"] = category
        page = max(page, 1)
        items = self.meals.list(
            query, skip=(page - 1) * page_size, limit=page_size, sort=[("createdAt", -1)]
        )
        return {"items": items, "total": self.meals.count(query)}
