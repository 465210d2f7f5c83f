"""
Repositories package - Data access layer.
"""

from repositories.base import MongoRepository
from repositories.meal_repository import MealRepository
from repositories.meal_request_repository import MealRequestRepository
from repositories.user_repository import UserRepository

__all__ = [
    "MongoRepository",
    "MealRepository",
    "MealRequestRepository",
    "UserRepository",
]
