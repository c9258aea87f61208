"""Dining domain API package."""

from dining.api.routes import restaurant_router, review_router

__all__ = ["restaurant_router", "review_router"]
