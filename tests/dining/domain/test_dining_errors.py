"""Tests for the dining error hierarchy."""

from dining.exceptions import (
    AggregationFailedError,
    DiningError,
    DuplicateReviewError,
    NotOwnerError,
    ReviewNotFoundError,
)


class TestDiningErrors:
    def test_message_defaults_to_docstring(self):
        assert str(ReviewNotFoundError()) == "Review not found."

    def test_explicit_message_wins(self):
        assert NotOwnerError("Nope").message == "Nope"

    def test_context_kept(self):
        exc = DuplicateReviewError(restaurant_id="r-1", user_id="u-1")
        assert exc.context == {"restaurant_id": "r-1", "user_id": "u-1"}

    def test_to_dict(self):
        assert DuplicateReviewError().to_dict() == {
            "success": False,
            "error": "duplicate_review",
            "message": "You have already reviewed this restaurant.",
        }

    def test_aggregation_failure_wraps_cause(self):
        cause = ConnectionError("store down")
        exc = AggregationFailedError("r-1", cause=cause)
        assert isinstance(exc, DiningError)
        assert exc.cause is cause
        assert exc.status_code == 503
        assert "r-1" in exc.message
