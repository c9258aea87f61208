"""WriteReview — a user reviews an approved restaurant.

One review per user per restaurant: checked here against the ledger and
enforced again by the unique ``author_key`` in storage, which settles races
between concurrent submissions.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import (
    DuplicateReviewError,
    RestaurantNotApprovedError,
    RestaurantNotFoundError,
)
from dining.restaurant.restaurant import Restaurant
from dining.review.review import Review

logger = structlog.get_logger(__name__)


@dining.command(part_of="Review")
class WriteReview:
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


@dining.command_handler(part_of=Review)
class WriteReviewHandler:
    @handle(WriteReview)
    def write_review(self, command):
        repo = current_domain.repository_for(Review)

        if repo.find_by_author(command.restaurant_id, command.user_id) is not None:
            raise DuplicateReviewError(
                restaurant_id=str(command.restaurant_id),
                user_id=str(command.user_id),
            )

        directory = current_domain.repository_for(Restaurant)
        if directory.find_approved_by_id(command.restaurant_id) is None:
            if directory.find_by_id(command.restaurant_id) is not None:
                raise RestaurantNotApprovedError(restaurant_id=str(command.restaurant_id))
            raise RestaurantNotFoundError(restaurant_id=str(command.restaurant_id))

        review = Review.write(
            user_id=command.user_id,
            restaurant_id=command.restaurant_id,
            rating=command.rating,
            comment=command.comment,
        )

        try:
            repo.add(review)
        except ValidationError as exc:
            if "author_key" in exc.messages:
                raise DuplicateReviewError(
                    restaurant_id=str(command.restaurant_id),
                    user_id=str(command.user_id),
                ) from exc
            raise

        logger.info(
            "Review written",
            review_id=str(review.id),
            restaurant_id=str(command.restaurant_id),
            user_id=str(command.user_id),
            rating=command.rating,
        )
        return str(review.id)
