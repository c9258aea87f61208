"""Shared BDD fixtures and step definitions for the Dining domain."""

import pytest
from dining.restaurant.restaurant import Restaurant
from dining.review.events import ReactionToggled, ReviewDeleted, ReviewRevised, ReviewWritten
from dining.review.review import Review
from protean import current_domain
from pytest_bdd import given, parsers, then

_REVIEW_EVENT_CLASSES = {
    "ReviewWritten": ReviewWritten,
    "ReviewRevised": ReviewRevised,
    "ReviewDeleted": ReviewDeleted,
    "ReactionToggled": ReactionToggled,
}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def reviews():
    """Review ids by author, for scenarios that go through the ledger."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a review written by "{user_id}"'), target_fixture="review")
def review_written_by(user_id):
    review = Review.write(
        user_id=user_id,
        restaurant_id="rest-bdd",
        rating=4,
        comment="A BDD review that is long enough.",
    )
    review._events.clear()
    return review


@given("an approved restaurant", target_fixture="restaurant_id")
def approved_restaurant(register_restaurant):
    return register_restaurant(name="BDD Bistro")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(review, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in review._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in review._events]}"


@then(parsers.cfparse("the restaurant has {count:d} reviews rated {rating:f}"))
def restaurant_has_rating(restaurant_id, count, rating):
    restaurant = current_domain.repository_for(Restaurant).get(restaurant_id)
    assert restaurant.review_count == count
    assert restaurant.rating == rating
