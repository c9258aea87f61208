"""DeleteReview — the author or an administrator deletes a review.

Reactions are detached and the review removed in the same unit of work, so
no reaction outlives its review.
"""

import structlog
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import ReviewNotFoundError
from dining.review.review import Review

logger = structlog.get_logger(__name__)


@dining.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    is_admin = Boolean(default=False)


@dining.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find_by_id(command.review_id)
        if review is None:
            raise ReviewNotFoundError(review_id=str(command.review_id))

        reaction_count = len(review.reactions)
        review.prepare_deletion(command.requester_id, is_admin=bool(command.is_admin))

        # Persist the detached reactions first, then drop the review itself
        repo.add(review)
        repo.remove(review)

        logger.info(
            "Review deleted",
            review_id=str(command.review_id),
            restaurant_id=str(review.restaurant_id),
            reactions_removed=reaction_count,
            by_admin=bool(command.is_admin),
        )
        return str(review.restaurant_id)
