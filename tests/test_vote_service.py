"""
Tests for the vote ledger (VoteService).

- Toggling adds a voter, toggling again removes it
- The count always equals the number of distinct voters
- Legacy meals without a likes array are initialised on first vote
- Empty voter ids and unknown meals are rejected
"""

import pytest
from unittest.mock import Mock

from test_fixtures import InMemoryMealRepository, make_meal
from services.vote_service import VoteService, VoteResult
from app.exceptions import ServiceValidationError, NotFoundError, ConflictError


@pytest.fixture
def meals():
    return InMemoryMealRepository()


@pytest.fixture
def votes(meals):
    return VoteService(meals)


def test_first_vote_likes_meal(meals, votes):
    """
    Test first vote by a user.

    Verifies:
    - Voter is added to likes
    - Result reports liked=True and count 1
    """
    meal_id = make_meal(meals)

    result = votes.toggle(meal_id, "u1")

    assert result == VoteResult(likes_count=1, liked=True)
    assert meals.docs[meal_id]["likes"] == ["u1"]


def test_second_vote_unlikes_meal(meals, votes):
    """Toggling twice restores the original likes (involution)"""
    meal_id = make_meal(meals, likes=["u1"])

    result = votes.toggle(meal_id, "u1")

    assert result == VoteResult(likes_count=0, liked=False)
    assert meals.docs[meal_id]["likes"] == []


def test_toggle_twice_is_identity(meals, votes):
    meal_id = make_meal(meals, likes=["u2", "u3"])

    votes.toggle(meal_id, "u1")
    votes.toggle(meal_id, "u1")

    assert sorted(meals.docs[meal_id]["likes"]) == ["u2", "u3"]


def test_count_matches_distinct_voters(meals, votes):
    meal_id = make_meal(meals)

    for voter in ("a", "b", "c", "b"):
        result = votes.toggle(meal_id, voter)

    assert result.likes_count == 2
    assert sorted(meals.docs[meal_id]["likes"]) == ["a", "c"]


def test_legacy_meal_without_likes(meals, votes):
    """
    Test voting on a meal stored before likes existed.

    Verifies:
    - Missing likes field is treated as empty
    - Vote is applied normally
    """
    meal_id = make_meal(meals, legacy_likes=True)
    assert "likes" not in meals.docs[meal_id]

    result = votes.toggle(meal_id, "u1")

    assert result.liked is True
    assert result.likes_count == 1


@pytest.mark.parametrize("voter", ["", "   ", None, 42, ["u1"]])
def test_empty_voter_rejected(meals, votes, voter):
    meal_id = make_meal(meals)

    with pytest.raises(ServiceValidationError):
        votes.toggle(meal_id, voter)

    assert meals.docs[meal_id]["likes"] == []


def test_unknown_meal(votes):
    with pytest.raises(NotFoundError):
        votes.toggle("64b7f0c2a1b2c3d4e5f60718", "u1")


def test_meal_deleted_between_updates():
    """A meal that disappears mid-toggle is reported as not found"""
    repo = Mock()
    repo.get_by_id.side_effect = [{"id": "m1", "likes": []}, None]
    repo.add_like.return_value = None
    repo.remove_like.return_value = None

    with pytest.raises(NotFoundError):
        VoteService(repo).toggle("m1", "u1")


def test_contended_toggle_gives_up():
    """Neither guard matching on every attempt ends in a conflict"""
    repo = Mock()
    repo.get_by_id.return_value = {"id": "m1", "likes": []}
    repo.add_like.return_value = None
    repo.remove_like.return_value = None

    with pytest.raises(ConflictError):
        VoteService(repo, max_attempts=2).toggle("m1", "u1")

    assert repo.add_like.call_count == 2
