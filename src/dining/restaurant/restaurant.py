"""Restaurant aggregate — the directory entry that reviews are written against.

Only approved restaurants accept reviews. The ``rating`` and ``review_count``
fields are derived from the review ledger and are written exclusively by the
rating aggregator through ``apply_rating``.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from dining.domain import dining
from dining.restaurant.events import (
    RestaurantApproved,
    RestaurantRatingRecomputed,
    RestaurantRegistered,
)

PRICE_RANGES = ("$", "$$", "$$$", "$$$$")


@dining.aggregate
class Restaurant:
    """A restaurant listed in the directory."""

    name = String(required=True, max_length=150)
    description = Text()
    category = String(max_length=100, default="")
    address = String(max_length=500, default="")
    cuisine = Text()  # JSON array of strings
    price_range = String(max_length=4, default="")
    image = String(max_length=500)

    approved = Boolean(default=False)

    # Rating aggregate
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(
        cls,
        name,
        description=None,
        category=None,
        address=None,
        cuisine=None,
        price_range=None,
        image=None,
        approved=False,
    ):
        """Register a new restaurant with an empty rating aggregate."""
        if price_range and price_range not in PRICE_RANGES:
            raise ValidationError({"price_range": [f"Price range must be one of {', '.join(PRICE_RANGES)}"]})

        now = datetime.now(UTC)
        restaurant = cls(
            name=name,
            description=description,
            category=category or "",
            address=address or "",
            cuisine=json.dumps(cuisine or []),
            price_range=price_range or "",
            image=image,
            approved=approved,
            rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
        )

        restaurant.raise_(
            RestaurantRegistered(
                restaurant_id=str(restaurant.id),
                name=name,
                category=restaurant.category,
                approved=approved,
                registered_at=now,
            )
        )
        return restaurant

    def approve(self):
        if self.approved:
            raise ValidationError({"approved": ["Restaurant is already approved"]})

        now = datetime.now(UTC)
        self.approved = True
        self.updated_at = now

        self.raise_(RestaurantApproved(restaurant_id=str(self.id), approved_at=now))

    def apply_rating(self, rating, review_count, recomputed_at=None):
        """Store a freshly computed rating aggregate."""
        now = recomputed_at or datetime.now(UTC)
        previous_rating, previous_count = self.rating, self.review_count

        self.rating = rating
        self.review_count = review_count
        self.updated_at = now

        self.raise_(
            RestaurantRatingRecomputed(
                restaurant_id=str(self.id),
                rating=rating,
                review_count=review_count,
                previous_rating=previous_rating,
                previous_review_count=previous_count,
                recomputed_at=now,
            )
        )

    @property
    def cuisine_list(self):
        return json.loads(self.cuisine) if self.cuisine else []

    def to_summary(self):
        return {
            "restaurant_id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "address": self.address,
            "cuisine": self.cuisine_list,
            "price_range": self.price_range,
            "image": self.image,
            "approved": self.approved,
            "rating": self.rating,
            "review_count": self.review_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
