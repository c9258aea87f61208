"""Rating aggregation — derive a restaurant's rating from its reviews.

``RecomputeRestaurantRating`` is the only code path that writes a
restaurant's ``rating`` and ``review_count``. It always rescans the full
review set, so running it again (or after a concurrent write) converges on
the current state of the ledger.
"""

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import AggregationFailedError, DiningError, RestaurantNotFoundError
from dining.restaurant.restaurant import Restaurant
from dining.review.review import Review

logger = structlog.get_logger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def average_rating(scores) -> float:
    """Mean of ``scores`` rounded half-up to one decimal; 0 for no scores.

    Scores may be review ratings or already-averaged restaurant ratings.
    """
    scores = [Decimal(str(score)) for score in scores]
    if not scores:
        return 0.0
    mean = sum(scores) / Decimal(len(scores))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


@dining.command(part_of="Restaurant")
class RecomputeRestaurantRating:
    restaurant_id = Identifier(required=True)


@dining.command_handler(part_of=Restaurant)
class RatingAggregatorHandler:
    @handle(RecomputeRestaurantRating)
    def recompute_rating(self, command):
        directory = current_domain.repository_for(Restaurant)
        if directory.find_by_id(command.restaurant_id) is None:
            raise RestaurantNotFoundError(restaurant_id=str(command.restaurant_id))

        scores = current_domain.repository_for(Review).ratings_for_restaurant(command.restaurant_id)
        rating = average_rating(scores)
        review_count = len(scores)

        directory.persist_aggregate(
            command.restaurant_id,
            rating=rating,
            review_count=review_count,
            updated_at=datetime.now(UTC),
        )

        logger.info(
            "Restaurant rating recomputed",
            restaurant_id=str(command.restaurant_id),
            rating=rating,
            review_count=review_count,
        )
        return {
            "restaurant_id": str(command.restaurant_id),
            "rating": rating,
            "review_count": review_count,
        }


def recompute(restaurant_id):
    """Recompute and persist the rating aggregate of one restaurant.

    Domain failures (unknown restaurant) propagate as they are; anything the
    store raises is reported as ``AggregationFailedError`` so callers know the
    remedy is to call ``recompute`` again.
    """
    try:
        return current_domain.process(
            RecomputeRestaurantRating(restaurant_id=str(restaurant_id)),
            asynchronous=False,
        )
    except DiningError:
        raise
    except Exception as exc:
        logger.error(
            "Restaurant rating recompute failed",
            restaurant_id=str(restaurant_id),
            error=str(exc),
        )
        raise AggregationFailedError(str(restaurant_id), cause=exc) from exc
