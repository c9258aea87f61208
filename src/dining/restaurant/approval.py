"""ApproveRestaurant — open a pending restaurant for reviews."""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dining.domain import dining
from dining.exceptions import RestaurantNotFoundError
from dining.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@dining.command(part_of="Restaurant")
class ApproveRestaurant:
    restaurant_id = Identifier(required=True)


@dining.command_handler(part_of=Restaurant)
class ApproveRestaurantHandler:
    @handle(ApproveRestaurant)
    def approve_restaurant(self, command):
        directory = current_domain.repository_for(Restaurant)
        restaurant = directory.find_by_id(command.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id=str(command.restaurant_id))

        restaurant.approve()
        directory.add(restaurant)

        logger.info("Restaurant approved", restaurant_id=str(restaurant.id))
