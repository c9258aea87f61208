"""Pydantic request/response schemas for the Dining API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterRestaurantRequest(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    cuisine: list[str] | None = None
    price_range: str | None = Field(default=None, max_length=4)
    image: str | None = Field(default=None, max_length=500)


class WriteReviewRequest(BaseModel):
    restaurant_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=10, max_length=500)


class ReviseReviewRequest(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = Field(default=None, min_length=10, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    total_reviews: int | None = None
    total_restaurants: int | None = None


class ReviewResponse(BaseModel):
    review_id: str
    restaurant_id: str
    user_id: str
    rating: int
    comment: str
    likes: int
    dislikes: int
    is_edited: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class ReviewPageResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: PaginationSchema


class ReactionResponse(BaseModel):
    review_id: str
    user_id: str
    kind: str | None = None


class RestaurantResponse(BaseModel):
    restaurant_id: str
    name: str
    description: str | None = None
    category: str | None = None
    address: str | None = None
    cuisine: list[str] = []
    price_range: str | None = None
    image: str | None = None
    approved: bool
    rating: float
    review_count: int
    created_at: str | None = None
    updated_at: str | None = None


class RestaurantDetailResponse(RestaurantResponse):
    recent_reviews: list[ReviewResponse] = []


class RestaurantPageResponse(BaseModel):
    restaurants: list[RestaurantResponse]
    pagination: PaginationSchema


class RankingEntryResponse(RestaurantResponse):
    position: int
    weighted_score: float


class RatingResponse(BaseModel):
    restaurant_id: str
    rating: float
    review_count: int


class RestaurantIdResponse(BaseModel):
    restaurant_id: str
    approved: bool


class StatusResponse(BaseModel):
    status: str = "ok"
