"""Application tests for reactions through the ledger."""

import pytest
from dining.exceptions import InvalidReactionError, ReviewNotFoundError, SelfReactionError
from dining.review import ledger
from dining.review.review import ReactionKind


@pytest.fixture()
def review(restaurant_id):
    return ledger.create_review(
        user_id="author",
        restaurant_id=restaurant_id,
        rating=4,
        comment="Great ramen, the broth is rich.",
    )


class TestAddReaction:
    def test_like_persists(self, review):
        updated = ledger.add_reaction(review.id, "fan-1", "like")
        assert updated.likes == 1
        assert ledger.get_review(review.id).likes == 1
        assert ledger.get_user_reaction(review.id, "fan-1").kind == ReactionKind.LIKE.value

    def test_triple_like_leaves_one_like(self, review):
        for _ in range(3):
            ledger.add_reaction(review.id, "fan-1", "like")
        stored = ledger.get_review(review.id)
        assert stored.likes == 1
        assert stored.dislikes == 0
        assert ledger.get_user_reaction(review.id, "fan-1") is not None

    def test_double_like_withdraws(self, review):
        ledger.add_reaction(review.id, "fan-1", "like")
        ledger.add_reaction(review.id, "fan-1", "like")
        assert ledger.get_review(review.id).likes == 0
        assert ledger.get_user_reaction(review.id, "fan-1") is None

    def test_switch_persists(self, review):
        ledger.add_reaction(review.id, "fan-1", "like")
        ledger.add_reaction(review.id, "fan-1", "dislike")
        stored = ledger.get_review(review.id)
        assert stored.likes == 0
        assert stored.dislikes == 1
        assert ledger.get_user_reaction(review.id, "fan-1").kind == ReactionKind.DISLIKE.value

    def test_reactions_from_several_users(self, review):
        ledger.add_reaction(review.id, "fan-1", "like")
        ledger.add_reaction(review.id, "fan-2", "like")
        ledger.add_reaction(review.id, "fan-3", "dislike")
        stored = ledger.get_review(review.id)
        assert (stored.likes, stored.dislikes) == (2, 1)

    def test_self_reaction_rejected(self, review):
        with pytest.raises(SelfReactionError):
            ledger.add_reaction(review.id, "author", "like")
        stored = ledger.get_review(review.id)
        assert (stored.likes, stored.dislikes) == (0, 0)

    def test_invalid_kind_rejected(self, review):
        with pytest.raises(InvalidReactionError):
            ledger.add_reaction(review.id, "fan-1", "meh")

    def test_missing_review(self):
        with pytest.raises(ReviewNotFoundError):
            ledger.add_reaction("missing", "fan-1", "like")

    def test_reactions_do_not_touch_restaurant_rating(self, review, restaurant_id):
        from dining.restaurant.restaurant import Restaurant
        from protean import current_domain

        before = current_domain.repository_for(Restaurant).get(restaurant_id)
        ledger.add_reaction(review.id, "fan-1", "dislike")
        after = current_domain.repository_for(Restaurant).get(restaurant_id)
        assert after.rating == before.rating
        assert after.updated_at == before.updated_at


class TestGetUserReaction:
    def test_none_without_reaction(self, review):
        assert ledger.get_user_reaction(review.id, "fan-9") is None

    def test_none_for_unknown_review(self):
        assert ledger.get_user_reaction("missing", "fan-1") is None
