"""ReviewRepository — queries over the review ledger."""

from protean.exceptions import ObjectNotFoundError

from dining.domain import dining
from dining.review.review import Reaction, Review, author_key_for

SORTABLE_FIELDS = ("created_at", "updated_at", "rating", "likes", "dislikes")


@dining.repository(part_of=Review)
class ReviewRepository:
    def find_by_id(self, review_id) -> Review | None:
        try:
            return self.get(review_id)
        except ObjectNotFoundError:
            return None

    def find_by_author(self, restaurant_id, user_id) -> Review | None:
        """The review ``user_id`` wrote for ``restaurant_id``, if any."""
        return self._dao.query.filter(author_key=author_key_for(restaurant_id, user_id)).all().first

    def reaction_of(self, review_id, user_id) -> Reaction | None:
        """The reaction ``user_id`` holds on ``review_id``; None if either is missing."""
        review = self.find_by_id(review_id)
        return review.reaction_of(user_id) if review is not None else None

    def for_restaurant(self, restaurant_id) -> list[Review]:
        """Every review of a restaurant, unpaginated."""
        return self._dao.query.filter(restaurant_id=str(restaurant_id)).limit(None).all().items

    def ratings_for_restaurant(self, restaurant_id) -> list[int]:
        return [review.rating for review in self.for_restaurant(restaurant_id)]

    def everything(self) -> list[Review]:
        return self._dao.query.limit(None).all().items

    def filtered(self, restaurant_id=None, user_id=None):
        """Queryset over reviews, optionally narrowed to a restaurant and/or author."""
        query = self._dao.query
        if restaurant_id:
            query = query.filter(restaurant_id=str(restaurant_id))
        if user_id:
            query = query.filter(user_id=str(user_id))
        return query
