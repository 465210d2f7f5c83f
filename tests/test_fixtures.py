"""
Shared test fixtures and utilities for the UniMeal test suite.

The in-memory repositories mirror the contracts of the Mongo repositories
(guarded like/unlike, version-guarded review writes, duplicate detection) so
services and routes can be exercised without a running database.
"""

import copy
import re
import uuid
from datetime import datetime, timezone, timedelta

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.exceptions import ConflictError
from api.dependencies import (
    get_meal_repository,
    get_meal_request_repository,
    get_upcoming_meal_repository,
    get_user_repository,
)
from domain.enums import RequestStatus
from main import app


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


class FixedClock:
    """Deterministic clock; each call advances one second"""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================


class InMemoryRepository:
    def __init__(self):
        self.docs = {}

    def get_by_id(self, entity_id):
        doc = self.docs.get(str(entity_id))
        return copy.deepcopy(doc) if doc is not None else None

    def list(self, query=None, skip=0, limit=20, sort=None):
        matched = [copy.deepcopy(d) for d in self.docs.values() if _matches(d, query or {})]
        return matched[skip: skip + limit]

    def count(self, query=None):
        return sum(1 for d in self.docs.values() if _matches(d, query or {}))

    def insert(self, entity):
        entity_id = entity.get("id") or str(ObjectId())
        self.docs[entity_id] = {**copy.deepcopy(entity), "id": entity_id}
        return entity_id

    def delete(self, entity_id):
        return self.docs.pop(str(entity_id), None) is not None


def _matches(doc, query):
    for key, expected in query.items():
        value = doc.get(key)
        if isinstance(expected, dict) and "$regex" in expected:
            if not re.search(expected["$regex"], value or "", re.IGNORECASE):
                return False
        elif value != expected:
            return False
    return True


class InMemoryMealRepository(InMemoryRepository):
    """Same contract as repositories.meal_repository.MealRepository"""

    def insert_if_absent(self, meal):
        if meal["id"] in self.docs:
            return False
        self.docs[meal["id"]] = copy.deepcopy(meal)
        return True

    def init_likes(self, meal_id):
        doc = self.docs.get(str(meal_id))
        if doc is None or isinstance(doc.get("likes"), list):
            return False
        doc["likes"] = []
        return True

    def add_like(self, meal_id, voter_id):
        doc = self.docs.get(str(meal_id))
        if doc is None or voter_id in doc.get("likes", []):
            return None
        doc.setdefault("likes", []).append(voter_id)
        return list(doc["likes"])

    def remove_like(self, meal_id, voter_id):
        doc = self.docs.get(str(meal_id))
        if doc is None or voter_id not in doc.get("likes", []):
            return None
        doc["likes"] = [v for v in doc["likes"] if v != voter_id]
        return list(doc["likes"])

    def write_reviews(self, meal_id, expected_version, reviews, rating, review_count):
        doc = self.docs.get(str(meal_id))
        if doc is None or int(doc.get("reviewsVersion") or 0) != expected_version:
            return None
        doc.update(
            reviews=copy.deepcopy(reviews),
            rating=rating,
            reviewCount=review_count,
            reviewsVersion=expected_version + 1,
        )
        return copy.deepcopy(doc)

    def find_reviews_by_email(self, email):
        return [
            copy.deepcopy(d)
            for d in self.docs.values()
            if any(r.get("email") == email for r in d.get("reviews") or [])
        ]


class InMemoryMealRequestRepository(InMemoryRepository):
    """Same contract as repositories.meal_request_repository.MealRequestRepository"""

    def find_existing(self, meal_id, user_id, email):
        for doc in self.docs.values():
            if (doc["mealId"], doc["userId"], doc["email"]) == (meal_id, user_id, email):
                return copy.deepcopy(doc)
        return None

    def insert(self, entity):
        if self.find_existing(entity["mealId"], entity["userId"], entity["email"]):
            raise ConflictError("You have already requested this meal")
        return super().insert(entity)

    def transition(self, request_id, status, now):
        doc = self.docs.get(str(request_id))
        if doc is None or doc["status"] != RequestStatus.PENDING.value:
            return None
        doc.update({"status": status.value, "updatedAt": now, status.stamp_field: now})
        return copy.deepcopy(doc)


class InMemoryUserRepository(InMemoryRepository):
    def get_by_email(self, email):
        for doc in self.docs.values():
            if doc.get("email") == email:
                return copy.deepcopy(doc)
        return None


# =============================================================================
# FACTORIES
# =============================================================================


def make_meal(repo, meal_id=None, likes=None, reviews=None, legacy_likes=False, **fields):
    """Store a meal in ``repo`` and return its id"""
    meal_id = meal_id or str(ObjectId())
    reviews = reviews or []
    ratings = [r["rating"] for r in reviews]
    doc = {
        "id": meal_id,
        "title": "Chicken Biryani",
        "category": "lunch",
        "description": "Fragrant rice with spiced chicken",
        "price": 6.5,
        "likes": list(likes) if likes is not None else [],
        "reviews": reviews,
        "rating": round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
        "reviewCount": len(reviews),
        "reviewsVersion": 0,
        "createdAt": datetime(2024, 12, 1, tzinfo=timezone.utc),
    }
    doc.update(fields)
    if legacy_likes:
        doc.pop("likes")
    repo.docs[meal_id] = doc
    return meal_id


def review_payload(**overrides):
    payload = {
        "user_id": "firebase-uid-1",
        "rating": 4,
        "comment": "Tasty and filling",
        "name": "Sarah Martinez",
        "email": "sarah.martinez@example.com",
        "meal_name": "Chicken Biryani",
        "likes": 3,
    }
    payload.update(overrides)
    return payload


AUTH_HEADERS = {"Authorization": "Bearer test-token"}


# =============================================================================
# PYTEST FIXTURES
# =============================================================================


@pytest.fixture
def meal_repo():
    return InMemoryMealRepository()


@pytest.fixture
def upcoming_repo():
    return InMemoryMealRepository()


@pytest.fixture
def request_repo():
    return InMemoryMealRequestRepository()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def client(meal_repo, upcoming_repo, request_repo, user_repo):
    """TestClient wired to in-memory repositories; the store lifespan is not run"""
    app.dependency_overrides[get_meal_repository] = lambda: meal_repo
    app.dependency_overrides[get_upcoming_meal_repository] = lambda: upcoming_repo
    app.dependency_overrides[get_meal_request_repository] = lambda: request_repo
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
