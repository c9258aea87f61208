"""Application tests for the unique review and reaction keys in storage."""

from datetime import UTC, datetime

import pytest
from dining.exceptions import DuplicateReviewError
from dining.review import ledger
from dining.review.repository import ReviewRepository
from dining.review.review import Reaction, Review
from protean import atomic_change, current_domain
from protean.exceptions import ValidationError


def _write(restaurant_id, user_id="racer", rating=4):
    return ledger.create_review(
        user_id=user_id,
        restaurant_id=restaurant_id,
        rating=rating,
        comment="Queued for an hour, worth it.",
    )


class TestReviewAuthorKey:
    def test_racing_duplicate_rejected_by_storage(self, restaurant_id, monkeypatch):
        # Both submissions pass the ledger's lookup, as concurrent requests would
        monkeypatch.setattr(ReviewRepository, "find_by_author", lambda self, restaurant_id, user_id: None)

        _write(restaurant_id, rating=5)
        with pytest.raises(DuplicateReviewError):
            _write(restaurant_id, rating=1)

        reviews = current_domain.repository_for(Review).for_restaurant(restaurant_id)
        assert len(reviews) == 1
        assert reviews[0].rating == 5

    def test_second_review_with_same_author_key_rejected(self):
        repo = current_domain.repository_for(Review)
        first = Review.write(
            user_id="user-1",
            restaurant_id="rest-1",
            rating=4,
            comment="First impressions were good.",
        )
        repo.add(first)

        second = Review.write(
            user_id="user-1",
            restaurant_id="rest-1",
            rating=2,
            comment="Second impressions were worse.",
        )
        with pytest.raises(ValidationError) as exc:
            repo.add(second)
        assert "author_key" in exc.value.messages


class TestReactionKey:
    def test_reaction_key_is_unique_across_reviews(self):
        repo = current_domain.repository_for(Review)
        liked = Review.write(
            user_id="author-1",
            restaurant_id="rest-1",
            rating=4,
            comment="Good espresso, tiny cups.",
        )
        liked.react("fan-1", "like")
        repo.add(liked)

        other = Review.write(
            user_id="author-2",
            restaurant_id="rest-1",
            rating=3,
            comment="Average espresso, big cups.",
        )
        with atomic_change(other):
            other.add_reactions(
                Reaction(
                    user_id="fan-1",
                    kind="like",
                    reaction_key=liked.reaction_of("fan-1").reaction_key,
                    created_at=datetime.now(UTC),
                )
            )
            other.likes = 1

        with pytest.raises(ValidationError) as exc:
            repo.add(other)
        assert "reaction_key" in exc.value.messages
