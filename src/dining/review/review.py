"""Review aggregate — the core of the review ledger.

A Review is one user's verdict on one restaurant. It owns the reactions other
users leave on it and caches their like/dislike counts.

Reaction toggle, per (review, user):
    none     --like-->    Liked       (likes + 1)
    Liked    --like-->    none        (likes - 1)
    Liked    --dislike--> Disliked    (likes - 1, dislikes + 1)
    Disliked --dislike--> none        (dislikes - 1)
    Disliked --like-->    Liked       (dislikes - 1, likes + 1)
"""

from collections import Counter
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from dining.domain import dining
from dining.exceptions import InvalidReactionError, NotOwnerError, SelfReactionError
from dining.review.events import (
    ReactionToggled,
    ReviewDeleted,
    ReviewRevised,
    ReviewWritten,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

COMMENT_MIN_LENGTH = 10
COMMENT_MAX_LENGTH = 500


class ReactionKind(Enum):
    LIKE = "like"
    DISLIKE = "dislike"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value.value if isinstance(value, cls) else str(value).lower())
        except ValueError:
            raise InvalidReactionError(kind=value) from None


class ReactionOutcome(Enum):
    ADDED = "Added"
    REMOVED = "Removed"
    SWITCHED = "Switched"


def author_key_for(restaurant_id, user_id):
    """Storage key that makes (restaurant, user) unique across reviews."""
    return f"{restaurant_id}:{user_id}"


def reaction_key_for(review_id, user_id):
    """Storage key that makes (review, user) unique across reactions."""
    return f"{review_id}:{user_id}"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@dining.entity(part_of="Review")
class Reaction:
    """A user's like or dislike on a review."""

    user_id = Identifier(required=True)
    kind = String(choices=ReactionKind, required=True)
    reaction_key = String(required=True, max_length=255, unique=True)
    created_at = DateTime(required=True)
    updated_at = DateTime()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@dining.aggregate
class Review:
    """A user's review of a restaurant."""

    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    author_key = String(required=True, max_length=255, unique=True)

    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)

    # Reactions
    reactions = HasMany(Reaction)
    likes = Integer(default=0, min_value=0)
    dislikes = Integer(default=0, min_value=0)

    is_edited = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def comment_length_within_bounds(self):
        if self.comment is None:
            return
        length = len(self.comment.strip())
        if length < COMMENT_MIN_LENGTH or length > COMMENT_MAX_LENGTH:
            raise ValidationError(
                {"comment": [f"Comment must be between {COMMENT_MIN_LENGTH} and {COMMENT_MAX_LENGTH} characters"]}
            )

    @invariant.post
    def one_reaction_per_user(self):
        users = [str(r.user_id) for r in self.reactions]
        if len(users) != len(set(users)):
            raise ValidationError({"reactions": ["A user can react to a review only once"]})

    @invariant.post
    def counters_match_reactions(self):
        tally = Counter(r.kind for r in self.reactions)
        if self.likes != tally[ReactionKind.LIKE.value] or self.dislikes != tally[ReactionKind.DISLIKE.value]:
            raise ValidationError({"reactions": ["Like/dislike counters diverged from the reactions"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def write(cls, user_id, restaurant_id, rating, comment):
        """Write a new review. Approval and uniqueness are checked by the ledger."""
        now = datetime.now(UTC)

        review = cls(
            user_id=user_id,
            restaurant_id=restaurant_id,
            author_key=author_key_for(restaurant_id, user_id),
            rating=rating,
            comment=comment,
            likes=0,
            dislikes=0,
            is_edited=False,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewWritten(
                review_id=str(review.id),
                restaurant_id=str(restaurant_id),
                user_id=str(user_id),
                rating=rating,
                comment=comment,
                written_at=now,
            )
        )
        return review

    def is_author(self, user_id):
        return str(user_id) == str(self.user_id)

    # -------------------------------------------------------------------
    # Revision
    # -------------------------------------------------------------------
    def revise(self, editor_id, rating=_UNSET, comment=_UNSET):
        """Apply a partial update from the author.

        Returns True when the patch carried a rating, which is the signal to
        recompute the restaurant's rating aggregate.
        """
        if not self.is_author(editor_id):
            raise NotOwnerError(review_id=str(self.id), user_id=str(editor_id))

        now = datetime.now(UTC)
        previous_rating = self.rating

        with atomic_change(self):
            if rating is not _UNSET and rating is not None:
                self.rating = rating
            if comment is not _UNSET and comment is not None:
                self.comment = comment
            self.is_edited = True
            self.updated_at = now

        rating_in_patch = rating is not _UNSET and rating is not None
        self.raise_(
            ReviewRevised(
                review_id=str(self.id),
                restaurant_id=str(self.restaurant_id),
                rating=self.rating,
                previous_rating=previous_rating,
                comment=self.comment,
                rating_changed=rating_in_patch and self.rating != previous_rating,
                revised_at=now,
            )
        )
        return rating_in_patch

    # -------------------------------------------------------------------
    # Reactions
    # -------------------------------------------------------------------
    def reaction_of(self, user_id):
        return next((r for r in self.reactions if str(r.user_id) == str(user_id)), None)

    def _bump(self, kind, delta):
        if kind == ReactionKind.LIKE:
            self.likes = self.likes + delta
        else:
            self.dislikes = self.dislikes + delta

    def react(self, user_id, kind):
        """Toggle ``user_id``'s reaction and return the resulting outcome."""
        kind = ReactionKind.parse(kind)
        if self.is_author(user_id):
            raise SelfReactionError(review_id=str(self.id), user_id=str(user_id))

        now = datetime.now(UTC)
        existing = self.reaction_of(user_id)

        with atomic_change(self):
            if existing is None:
                self.add_reactions(
                    Reaction(
                        user_id=user_id,
                        kind=kind.value,
                        reaction_key=reaction_key_for(self.id, user_id),
                        created_at=now,
                    )
                )
                self._bump(kind, 1)
                outcome = ReactionOutcome.ADDED
            elif ReactionKind(existing.kind) == kind:
                self.remove_reactions(existing)
                self._bump(kind, -1)
                outcome = ReactionOutcome.REMOVED
            else:
                self._bump(ReactionKind(existing.kind), -1)
                existing.kind = kind.value
                existing.updated_at = now
                self._bump(kind, 1)
                outcome = ReactionOutcome.SWITCHED
            self.updated_at = now

        self.raise_(
            ReactionToggled(
                review_id=str(self.id),
                user_id=str(user_id),
                kind=kind.value,
                outcome=outcome.value,
                likes=self.likes,
                dislikes=self.dislikes,
                toggled_at=now,
            )
        )
        return outcome

    # -------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------
    def prepare_deletion(self, requester_id, is_admin=False):
        """Detach every reaction ahead of deleting the review itself."""
        if not (is_admin or self.is_author(requester_id)):
            raise NotOwnerError(review_id=str(self.id), user_id=str(requester_id))

        now = datetime.now(UTC)
        removed = list(self.reactions)

        with atomic_change(self):
            for reaction in removed:
                self.remove_reactions(reaction)
            self.likes = 0
            self.dislikes = 0
            self.updated_at = now

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                restaurant_id=str(self.restaurant_id),
                user_id=str(self.user_id),
                rating=self.rating,
                deleted_by=str(requester_id),
                deleted_by_admin=bool(is_admin) and not self.is_author(requester_id),
                reactions_removed=len(removed),
                deleted_at=now,
            )
        )

    def to_summary(self):
        return {
            "review_id": str(self.id),
            "restaurant_id": str(self.restaurant_id),
            "user_id": str(self.user_id),
            "rating": self.rating,
            "comment": self.comment,
            "likes": self.likes,
            "dislikes": self.dislikes,
            "is_edited": self.is_edited,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
