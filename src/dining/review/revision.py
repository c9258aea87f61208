"""ReviseReview — the author edits the rating and/or comment of their review."""

import structlog
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import ReviewNotFoundError
from dining.review.review import Review

logger = structlog.get_logger(__name__)


@dining.command(part_of="Review")
class ReviseReview:
    review_id = Identifier(required=True)
    editor_id = Identifier(required=True)  # Must match original author
    rating = Integer(min_value=1, max_value=5)
    comment = Text()


@dining.command_handler(part_of=Review)
class ReviseReviewHandler:
    @handle(ReviseReview)
    def revise_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find_by_id(command.review_id)
        if review is None:
            raise ReviewNotFoundError(review_id=str(command.review_id))

        kwargs = {}
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.comment is not None:
            kwargs["comment"] = command.comment

        rating_in_patch = review.revise(command.editor_id, **kwargs)
        repo.add(review)

        logger.info(
            "Review revised",
            review_id=str(review.id),
            rating_in_patch=rating_in_patch,
        )
        return {
            "review_id": str(review.id),
            "restaurant_id": str(review.restaurant_id),
            "rating_in_patch": rating_in_patch,
        }
