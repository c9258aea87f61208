"""Review ledger — the entry point for every review mutation.

Each mutation is processed as a command (its own unit of work) and, once that
has committed, the affected restaurant's rating is recomputed before the
call returns. Callers therefore never observe a stale rating after a
successful create, rating update or delete.
"""

import structlog
from protean.utils.globals import current_domain

from dining.exceptions import ReviewNotFoundError
from dining.rating.aggregation import recompute
from dining.review.deletion import DeleteReview
from dining.review.reactions import ReactToReview
from dining.review.repository import SORTABLE_FIELDS
from dining.review.review import Review
from dining.review.revision import ReviseReview
from dining.review.writing import WriteReview
from dining.utils.pagination import order_clause, paginate

logger = structlog.get_logger(__name__)


def _reviews():
    return current_domain.repository_for(Review)


def get_review(review_id) -> Review:
    review = _reviews().find_by_id(review_id)
    if review is None:
        raise ReviewNotFoundError(review_id=str(review_id))
    return review


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
def create_review(user_id, restaurant_id, rating, comment) -> Review:
    review_id = current_domain.process(
        WriteReview(
            user_id=user_id,
            restaurant_id=restaurant_id,
            rating=rating,
            comment=comment,
        ),
        asynchronous=False,
    )
    recompute(restaurant_id)
    return get_review(review_id)


def update_review(review_id, editor_user_id, rating=None, comment=None) -> Review:
    result = current_domain.process(
        ReviseReview(
            review_id=review_id,
            editor_id=editor_user_id,
            rating=rating,
            comment=comment,
        ),
        asynchronous=False,
    )
    if result["rating_in_patch"]:
        recompute(result["restaurant_id"])
    return get_review(review_id)


def delete_review(review_id, requester_user_id, is_admin=False) -> None:
    restaurant_id = current_domain.process(
        DeleteReview(
            review_id=review_id,
            requester_id=requester_user_id,
            is_admin=is_admin,
        ),
        asynchronous=False,
    )
    recompute(restaurant_id)


def add_reaction(review_id, user_id, kind) -> Review:
    current_domain.process(
        ReactToReview(review_id=review_id, user_id=user_id, kind=kind),
        asynchronous=False,
    )
    return get_review(review_id)


def get_user_reaction(review_id, user_id):
    """The reaction ``user_id`` holds on ``review_id``, or None."""
    return _reviews().reaction_of(review_id, user_id)


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
def _listing(restaurant_id=None, user_id=None, page=1, limit=None, sort_by="created_at", sort_order="desc"):
    if sort_by not in SORTABLE_FIELDS:
        sort_by = "created_at"
    query = _reviews().filtered(restaurant_id=restaurant_id, user_id=user_id)
    query = query.order_by(order_clause(sort_by, sort_order))

    reviews, pagination = paginate(query, page, limit, total_key="total_reviews")
    return {"reviews": reviews, "pagination": pagination}


def reviews_for_restaurant(restaurant_id, **options):
    return _listing(restaurant_id=restaurant_id, **options)


def reviews_by_user(user_id, **options):
    return _listing(user_id=user_id, **options)


def all_reviews(restaurant_id=None, user_id=None, **options):
    return _listing(restaurant_id=restaurant_id, user_id=user_id, **options)
