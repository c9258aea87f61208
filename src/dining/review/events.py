"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes in the
review ledger.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from dining.domain import dining


@dining.event(part_of="Review")
class ReviewWritten:
    """A user reviewed a restaurant."""

    __version__ = 1

    review_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    written_at = DateTime(required=True)


@dining.event(part_of="Review")
class ReviewRevised:
    """The author changed the rating and/or comment of their review."""

    __version__ = 1

    review_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    rating = Integer(required=True)
    previous_rating = Integer(required=True)
    comment = Text()
    rating_changed = Boolean(required=True)
    revised_at = DateTime(required=True)


@dining.event(part_of="Review")
class ReviewDeleted:
    """A review and all of its reactions were deleted."""

    __version__ = 1

    review_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    deleted_by = Identifier(required=True)
    deleted_by_admin = Boolean(default=False)
    reactions_removed = Integer(default=0)
    deleted_at = DateTime(required=True)


@dining.event(part_of="Review")
class ReactionToggled:
    """A user liked, disliked, or withdrew a reaction on a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    kind = String(required=True)
    outcome = String(required=True)  # "Added", "Removed" or "Switched"
    likes = Integer(required=True)
    dislikes = Integer(required=True)
    toggled_at = DateTime(required=True)
