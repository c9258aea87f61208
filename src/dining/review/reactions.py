"""ReactToReview — like or dislike someone else's review.

Repeating the same reaction withdraws it; reacting with the other kind
switches it. The reaction and the cached counters change in one save.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import ReviewNotFoundError
from dining.review.review import Review

logger = structlog.get_logger(__name__)


@dining.command(part_of="Review")
class ReactToReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    kind = String(required=True)  # "like" or "dislike"


@dining.command_handler(part_of=Review)
class ReactToReviewHandler:
    @handle(ReactToReview)
    def react_to_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find_by_id(command.review_id)
        if review is None:
            raise ReviewNotFoundError(review_id=str(command.review_id))

        outcome = review.react(command.user_id, command.kind)
        repo.add(review)

        logger.info(
            "Reaction toggled",
            review_id=str(review.id),
            user_id=str(command.user_id),
            kind=command.kind,
            outcome=outcome.value,
        )
        return outcome.value
