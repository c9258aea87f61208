"""Offset pagination over Protean querysets."""

import math

from protean.utils.globals import current_domain

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def page_size_limits():
    """Default and maximum page sizes from the ``[custom]`` config section."""
    custom = current_domain.config.get("custom", {}) or {}
    return (
        int(custom.get("page_size_default", DEFAULT_PAGE_SIZE)),
        int(custom.get("page_size_max", MAX_PAGE_SIZE)),
    )


def order_clause(sort_by, sort_order):
    return f"-{sort_by}" if sort_order == "desc" else sort_by


def paginate(queryset, page=1, limit=None, total_key="total"):
    """Slice ``queryset`` to one page and describe where that page sits.

    Returns ``(items, pagination)``; ``total_key`` names the total counter in
    the pagination block (``total_reviews``, ``total_restaurants``).
    """
    default_size, max_size = page_size_limits()
    limit = min(max(int(limit or default_size), 1), max_size)
    page = max(int(page or 1), 1)

    result = queryset.offset((page - 1) * limit).limit(limit).all()
    total_pages = math.ceil(result.total / limit) if result.total else 0

    return result.items, {
        "current_page": page,
        "total_pages": total_pages,
        total_key: result.total,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
