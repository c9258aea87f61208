"""RegisterRestaurant — add a restaurant to the directory.

Restaurants registered by administrators are approved immediately; everyone
else's registration waits for an administrator's approval.
"""

import json

import structlog
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@dining.command(part_of="Restaurant")
class RegisterRestaurant:
    name = String(required=True, max_length=150)
    description = Text()
    category = String(max_length=100)
    address = String(max_length=500)
    cuisine = Text()  # JSON array of strings
    price_range = String(max_length=4)
    image = String(max_length=500)
    registered_by_admin = Boolean(default=False)


@dining.command_handler(part_of=Restaurant)
class RegisterRestaurantHandler:
    @handle(RegisterRestaurant)
    def register_restaurant(self, command):
        restaurant = Restaurant.register(
            name=command.name,
            description=command.description,
            category=command.category,
            address=command.address,
            cuisine=json.loads(command.cuisine) if command.cuisine else None,
            price_range=command.price_range,
            image=command.image,
            approved=bool(command.registered_by_admin),
        )
        current_domain.repository_for(Restaurant).add(restaurant)

        logger.info(
            "Restaurant registered",
            restaurant_id=str(restaurant.id),
            approved=restaurant.approved,
        )
        return str(restaurant.id)
