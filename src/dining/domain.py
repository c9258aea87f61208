"""Dining bounded context — Restaurants, Reviews, Reactions and Ratings.

Handles the review ledger (one review per user per restaurant, like/dislike
reactions), the rating aggregate kept on every restaurant, and the weighted
restaurant ranking. Rating aggregates are recomputed synchronously after
every review mutation.
"""

from protean.domain import Domain

from dining.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="dining")

logger = get_logger(__name__)

# Domain Composition Root
dining = Domain(name="dining")
