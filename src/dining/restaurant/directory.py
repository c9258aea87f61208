"""RestaurantDirectory — repository for the Restaurant aggregate.

The review ledger reads approval state through this repository, and the
rating aggregator writes the derived rating fields through
``persist_aggregate``.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.query import Q

from dining.domain import dining
from dining.restaurant.restaurant import Restaurant
from dining.utils.pagination import order_clause, paginate

SORTABLE_FIELDS = ("rating", "review_count", "name", "created_at")


@dining.repository(part_of=Restaurant)
class RestaurantDirectory:
    def find_by_id(self, restaurant_id) -> Restaurant | None:
        """Find a restaurant regardless of its approval state."""
        try:
            return self.get(restaurant_id)
        except ObjectNotFoundError:
            return None

    def find_approved_by_id(self, restaurant_id) -> Restaurant | None:
        restaurant = self.find_by_id(restaurant_id)
        if restaurant is None or not restaurant.approved:
            return None
        return restaurant

    def persist_aggregate(self, restaurant_id, rating, review_count, updated_at) -> Restaurant:
        restaurant = self.get(restaurant_id)
        restaurant.apply_rating(rating, review_count, recomputed_at=updated_at)
        self.add(restaurant)
        return restaurant

    def list_approved(self, category=None) -> list[Restaurant]:
        filters = {"approved": True}
        if category:
            filters["category"] = category
        return self._dao.query.filter(**filters).limit(None).all().items

    def list_all(self) -> list[Restaurant]:
        return self._dao.query.limit(None).all().items

    def search(
        self,
        category=None,
        search=None,
        min_rating=None,
        approved=True,
        sort_by="rating",
        sort_order="desc",
        page=1,
        limit=None,
    ):
        """Filtered, sorted, paginated listing of restaurants.

        ``approved=None`` lists restaurants in every approval state.
        """
        query = self._dao.query
        if approved is not None:
            query = query.filter(approved=approved)
        if category:
            query = query.filter(category=category)
        if min_rating is not None:
            query = query.filter(rating__gte=float(min_rating))
        if search:
            query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))

        if sort_by not in SORTABLE_FIELDS:
            sort_by = "rating"
        query = query.order_by(order_clause(sort_by, sort_order))

        restaurants, pagination = paginate(query, page, limit, total_key="total_restaurants")
        return {"restaurants": restaurants, "pagination": pagination}
