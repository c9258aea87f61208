"""Restaurant ranking — blend quality (rating) with confidence (review volume).

    weighted_score = rating * 0.7 + min(review_count / 10, 1) * 0.3

The volume term saturates at 10 reviews, so a single 5-star review cannot
outrank a well-reviewed 4.8, and raw review count cannot outweigh quality.
Restaurants without reviews score 0.
"""

import structlog
from protean.utils.globals import current_domain

from dining.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)

RATING_WEIGHT = 0.7
VOLUME_WEIGHT = 0.3
VOLUME_SATURATION = 10
DEFAULT_LIMIT = 10


def weighted_score(rating, review_count) -> float:
    if not review_count or review_count <= 0:
        return 0.0
    return rating * RATING_WEIGHT + min(review_count / VOLUME_SATURATION, 1) * VOLUME_WEIGHT


def _sort_key(restaurant):
    return (
        weighted_score(restaurant.rating, restaurant.review_count),
        restaurant.review_count,
        restaurant.rating,
    )


def rank(restaurants, category=None, limit=DEFAULT_LIMIT) -> list:
    """Order approved ``restaurants`` by weighted score, best first.

    Ties on the score fall back to review count, then rating. Read-only:
    nothing passed in is modified.
    """
    candidates = [
        r for r in restaurants if r.approved and (not category or r.category == category)
    ]
    ordered = sorted(candidates, key=_sort_key, reverse=True)
    return ordered[: max(int(limit), 0)]


def default_limit() -> int:
    custom = current_domain.config.get("custom", {}) or {}
    return int(custom.get("ranking_default_limit", DEFAULT_LIMIT))


def ranking(category=None, limit=None) -> list[dict]:
    """Leaderboard of approved restaurants, each entry with its weighted score."""
    limit = default_limit() if limit is None else limit
    restaurants = current_domain.repository_for(Restaurant).list_approved(category=category)
    ranked = rank(restaurants, category=category, limit=limit)

    logger.debug("Ranking computed", category=category, limit=limit, candidates=len(restaurants))
    return [
        {
            **restaurant.to_summary(),
            "position": position,
            "weighted_score": round(weighted_score(restaurant.rating, restaurant.review_count), 4),
        }
        for position, restaurant in enumerate(ranked, start=1)
    ]
