"""API routes package"""

from . import health, meals, upcoming_meals, reviews, meal_requests, users

__all__ = ["health", "meals", "upcoming_meals", "reviews", "meal_requests", "users"]
