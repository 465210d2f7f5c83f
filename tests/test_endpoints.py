"""
Endpoint tests through FastAPI's TestClient.

Repositories are replaced with in-memory versions via dependency overrides
(see test_fixtures.client), so these run without MongoDB.
"""

import pytest

from test_fixtures import (
    client,
    meal_repo,
    upcoming_repo,
    request_repo,
    user_repo,
    make_meal,
    unique_email,
    AUTH_HEADERS,
)


def review_body(**overrides):
    body = {
        "userId": "firebase-uid-1",
        "rating": 4,
        "comment": "Tasty and filling",
        "name": "Sarah Martinez",
        "email": "sarah@example.com",
        "mealName": "Chicken Biryani",
        "likes": 3,
    }
    body.update(overrides)
    return body


# =============================================================================
# HEALTH
# =============================================================================


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.text


def test_health_check_without_store(client):
    response = client.get("/health-check")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "not configured"


# =============================================================================
# MEALS AND VOTES
# =============================================================================


def test_create_and_get_meal(client, meal_repo):
    payload = {"title": "Veggie Wrap", "category": "lunch", "price": 4.5}

    response = client.post("/meals", json=payload, headers=AUTH_HEADERS)

    assert response.status_code == 201
    created = response.json()
    assert created["likes"] == []
    assert created["rating"] == 0.0
    assert created["reviewCount"] == 0

    fetched = client.get(f"/meals/{created['id']}").json()
    assert fetched["title"] == "Veggie Wrap"


def test_list_meals_search(client, meal_repo):
    make_meal(meal_repo, title="Chicken Biryani")
    make_meal(meal_repo, title="Veggie Wrap")

    response = client.get("/meals", params={"search": "biryani"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["title"] == "Chicken Biryani"
    assert data["pageSize"] == 20
    assert data["hasNext"] is False


def test_like_toggle(client, meal_repo):
    """
    Test POST /meals/{id}/like.

    Verifies:
    - First call likes, second call unlikes
    - Response reports likesCount and liked
    """
    meal_id = make_meal(meal_repo)

    first = client.post(f"/meals/{meal_id}/like", json={"userId": "u1"}, headers=AUTH_HEADERS)
    second = client.post(f"/meals/{meal_id}/like", json={"userId": "u1"}, headers=AUTH_HEADERS)

    assert first.status_code == 200
    assert first.json() == {"likesCount": 1, "liked": True}
    assert second.json() == {"likesCount": 0, "liked": False}


def test_like_without_user_id(client, meal_repo):
    meal_id = make_meal(meal_repo)

    response = client.post(f"/meals/{meal_id}/like", json={}, headers=AUTH_HEADERS)

    assert response.status_code == 400


def test_like_unknown_meal(client):
    response = client.post(
        "/meals/64b7f0c2a1b2c3d4e5f60718/like", json={"userId": "u1"}, headers=AUTH_HEADERS
    )

    assert response.status_code == 404


# =============================================================================
# UPCOMING MEALS AND PROMOTION
# =============================================================================


def test_upcoming_like_publishes_at_threshold(client, upcoming_repo, meal_repo):
    meal_id = make_meal(upcoming_repo, likes=[f"u{i}" for i in range(9)])

    response = client.patch(
        f"/upcomming-meals/like/{meal_id}", json={"userId": "u9"}, headers=AUTH_HEADERS
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["published"] is True
    assert data["likesCount"] == 10
    assert meal_id in meal_repo.docs
    assert meal_id not in upcoming_repo.docs


def test_upcoming_like_below_threshold(client, upcoming_repo):
    meal_id = make_meal(upcoming_repo)

    data = client.patch(
        f"/upcomming-meals/like/{meal_id}", json={"userId": "u1"}, headers=AUTH_HEADERS
    ).json()

    assert data["published"] is False
    assert data["liked"] is True
    assert data["likesCount"] == 1


def test_manual_publish(client, upcoming_repo, meal_repo):
    meal_id = make_meal(upcoming_repo)

    response = client.post(f"/publish-upcoming-meal/{meal_id}", headers=AUTH_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Meal published successfully"}
    assert client.get(f"/upcomming-meals/{meal_id}").status_code == 404
    assert client.get(f"/meals/{meal_id}").status_code == 200
    assert client.get(f"/meals/{meal_id}").json()["promotionTrigger"] == "manual"


def test_publish_twice_not_found(client, upcoming_repo):
    meal_id = make_meal(upcoming_repo)
    client.post(f"/publish-upcoming-meal/{meal_id}", headers=AUTH_HEADERS)

    response = client.post(f"/publish-upcoming-meal/{meal_id}", headers=AUTH_HEADERS)

    assert response.status_code == 404


# =============================================================================
# REVIEWS
# =============================================================================


def test_add_and_remove_review(client, meal_repo):
    """
    Test the review round trip over HTTP.

    Verifies:
    - 4 then 5 gives rating 4.5
    - Removing index 0 gives rating 5.0 and reviewCount 1
    """
    meal_id = make_meal(meal_repo)

    first = client.post(f"/meals/{meal_id}/review", json=review_body(rating=4), headers=AUTH_HEADERS)
    second = client.post(f"/meals/{meal_id}/review", json=review_body(rating=5), headers=AUTH_HEADERS)

    assert first.status_code == 200
    assert first.json()["message"] == "Review added successfully"
    assert second.json()["meal"]["rating"] == 4.5

    removed = client.delete(f"/user/reviews/{meal_id}/0", headers=AUTH_HEADERS)

    assert removed.status_code == 200
    meal = removed.json()["meal"]
    assert meal["rating"] == 5.0
    assert meal["reviewCount"] == 1


def test_review_missing_fields(client, meal_repo):
    meal_id = make_meal(meal_repo)

    response = client.post(
        f"/meals/{meal_id}/review", json=review_body(comment=None), headers=AUTH_HEADERS
    )

    assert response.status_code == 400


def test_review_rating_out_of_range(client, meal_repo):
    meal_id = make_meal(meal_repo)

    response = client.post(
        f"/meals/{meal_id}/review", json=review_body(rating=9), headers=AUTH_HEADERS
    )

    assert response.status_code == 400


def test_update_review_by_index_out_of_range(client, meal_repo):
    meal_id = make_meal(meal_repo)

    response = client.put(
        f"/user/reviews/{meal_id}/3", json={"rating": 2}, headers=AUTH_HEADERS
    )

    assert response.status_code == 400


def test_update_review_by_id(client, meal_repo):
    meal_id = make_meal(meal_repo)
    meal = client.post(
        f"/meals/{meal_id}/review", json=review_body(rating=2), headers=AUTH_HEADERS
    ).json()["meal"]
    review_id = meal["reviews"][0]["reviewId"]

    response = client.put(
        f"/meals/{meal_id}/reviews/{review_id}",
        json={"rating": 5, "comment": "Changed my mind"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["meal"]["rating"] == 5.0


def test_admin_delete_review(client, meal_repo):
    meal_id = make_meal(meal_repo)
    client.post(f"/meals/{meal_id}/review", json=review_body(), headers=AUTH_HEADERS)

    response = client.delete(f"/admin/reviews/{meal_id}/0", headers=AUTH_HEADERS)

    assert response.status_code == 200
    assert response.json()["meal"]["reviewCount"] == 0


def test_list_user_reviews(client, meal_repo):
    meal_id = make_meal(meal_repo)
    client.post(f"/meals/{meal_id}/review", json=review_body(email="ana@example.com"), headers=AUTH_HEADERS)

    response = client.get("/user/reviews/ana@example.com", headers=AUTH_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["reviews"][0]["mealId"] == meal_id
    assert data["reviews"][0]["index"] == 0


# =============================================================================
# MEAL REQUESTS
# =============================================================================


def request_body(**overrides):
    body = {
        "userId": "u1",
        "name": "Sarah Martinez",
        "mealName": "Chicken Biryani",
        "email": "sarah@example.com",
    }
    body.update(overrides)
    return body


def test_request_lifecycle(client, meal_repo):
    """
    Test a request from creation to delivery.

    Verifies:
    - POST returns 201 with a requestId
    - PATCH delivered sets approvedAt
    - A second PATCH is rejected with 409
    """
    meal_id = make_meal(meal_repo)

    created = client.post(f"/meals/{meal_id}/request", json=request_body(), headers=AUTH_HEADERS)

    assert created.status_code == 201
    request_id = created.json()["requestId"]

    delivered = client.patch(
        f"/meal-requests/{request_id}", json={"status": "delivered"}, headers=AUTH_HEADERS
    )
    assert delivered.status_code == 200
    assert delivered.json()["request"]["approvedAt"] is not None

    again = client.patch(
        f"/meal-requests/{request_id}", json={"status": "cancelled"}, headers=AUTH_HEADERS
    )
    assert again.status_code == 409


def test_duplicate_request(client, meal_repo):
    meal_id = make_meal(meal_repo)
    client.post(f"/meals/{meal_id}/request", json=request_body(), headers=AUTH_HEADERS)

    response = client.post(f"/meals/{meal_id}/request", json=request_body(), headers=AUTH_HEADERS)

    assert response.status_code == 409
    assert response.json()["message"] == "You have already requested this meal"


def test_request_invalid_status(client, meal_repo):
    meal_id = make_meal(meal_repo)
    request_id = client.post(
        f"/meals/{meal_id}/request", json=request_body(), headers=AUTH_HEADERS
    ).json()["requestId"]

    response = client.patch(
        f"/meal-requests/{request_id}", json={"status": "lost"}, headers=AUTH_HEADERS
    )

    assert response.status_code == 400


def test_list_requests_by_status(client, meal_repo):
    meal_id = make_meal(meal_repo)
    client.post(f"/meals/{meal_id}/request", json=request_body(), headers=AUTH_HEADERS)

    response = client.get("/meal-requests", params={"status": "pending"}, headers=AUTH_HEADERS)

    assert response.status_code == 200
    assert response.json()["total"] == 1


# =============================================================================
# USERS
# =============================================================================


def test_create_user_and_duplicate(client):
    email = unique_email("user")

    created = client.post("/users", json={"email": email, "name": "Ana"})
    duplicate = client.post("/users", json={"email": email.upper(), "name": "Ana"})

    assert created.status_code == 201
    assert created.json()["inserted"] is True
    assert duplicate.status_code == 409
    assert duplicate.json()["message"] == "user already exists"


def test_get_user(client):
    email = unique_email("user")
    client.post("/users", json={"email": email, "name": "Ana"})

    response = client.get(f"/users/{email}")

    assert response.status_code == 200
    assert response.json()["email"] == email
