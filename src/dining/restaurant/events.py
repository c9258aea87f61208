"""Domain events for the Restaurant aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from dining.domain import dining


@dining.event(part_of="Restaurant")
class RestaurantRegistered:
    """A new restaurant was added to the directory."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    approved = Boolean(required=True)
    registered_at = DateTime(required=True)


@dining.event(part_of="Restaurant")
class RestaurantApproved:
    """An administrator approved a pending restaurant."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@dining.event(part_of="Restaurant")
class RestaurantRatingRecomputed:
    """The restaurant's rating aggregate was recomputed from its reviews."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    rating = Float(required=True)
    review_count = Integer(required=True)
    previous_rating = Float()
    previous_review_count = Integer()
    recomputed_at = DateTime(required=True)
