"""Typed failures raised by the dining domain.

Each error carries the HTTP status the API layer answers with and a stable
``code`` so clients can tell "try again" from "not allowed" from "does not
exist" without parsing messages.
"""


class DiningError(Exception):
    """Base class for every dining domain failure."""

    status_code = 400
    code = "dining_error"

    def __init__(self, message=None, **context):
        self.message = message or self.__class__.__doc__.strip().splitlines()[0]
        self.context = context
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "error": self.code, "message": self.message}


class RestaurantNotFoundError(DiningError):
    """Restaurant not found."""

    status_code = 404
    code = "restaurant_not_found"


class RestaurantNotApprovedError(DiningError):
    """Restaurant is pending approval and cannot receive reviews yet."""

    status_code = 409
    code = "restaurant_not_approved"


class DuplicateReviewError(DiningError):
    """You have already reviewed this restaurant."""

    status_code = 409
    code = "duplicate_review"


class ReviewNotFoundError(DiningError):
    """Review not found."""

    status_code = 404
    code = "review_not_found"


class NotOwnerError(DiningError):
    """Only the review author can perform this action."""

    status_code = 403
    code = "not_owner"


class SelfReactionError(DiningError):
    """You cannot react to your own review."""

    status_code = 400
    code = "self_reaction"


class InvalidReactionError(DiningError):
    """Reaction must be either "like" or "dislike"."""

    status_code = 400
    code = "invalid_reaction"


class AggregationFailedError(DiningError):
    """Restaurant rating could not be recomputed; retry the recompute."""

    status_code = 503
    code = "aggregation_failed"

    def __init__(self, restaurant_id, cause=None):
        self.restaurant_id = restaurant_id
        self.cause = cause
        super().__init__(
            f"Rating for restaurant {restaurant_id} could not be recomputed",
            restaurant_id=restaurant_id,
        )
