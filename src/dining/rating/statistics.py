"""Platform-wide statistics over reviews and restaurants."""

from collections import Counter, defaultdict

from protean.utils.globals import current_domain

from dining.rating.aggregation import average_rating
from dining.restaurant.restaurant import Restaurant
from dining.review.review import Review


def review_stats():
    reviews = current_domain.repository_for(Review).everything()
    distribution = Counter(review.rating for review in reviews)

    return {
        "total_reviews": len(reviews),
        "average_rating": average_rating(review.rating for review in reviews),
        "total_likes": sum(review.likes for review in reviews),
        "total_dislikes": sum(review.dislikes for review in reviews),
        "rating_distribution": {str(score): distribution.get(score, 0) for score in range(1, 6)},
    }


def restaurant_stats():
    restaurants = current_domain.repository_for(Restaurant).list_all()
    approved = [r for r in restaurants if r.approved]

    by_category = defaultdict(list)
    for restaurant in approved:
        by_category[restaurant.category or ""].append(restaurant.rating)

    categories = [
        {"category": category, "count": len(ratings), "average_rating": average_rating(ratings)}
        for category, ratings in by_category.items()
    ]
    categories.sort(key=lambda c: c["count"], reverse=True)

    return {
        "total": len(restaurants),
        "approved": len(approved),
        "pending": len(restaurants) - len(approved),
        "average_rating": average_rating(r.rating for r in restaurants),
        "by_category": categories,
    }
