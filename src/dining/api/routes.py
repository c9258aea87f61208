"""FastAPI routes for the Dining bounded context.

Each route translates between Pydantic schemas (external contract) and the
review ledger, directory commands and rating queries.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from dining.api.identity import Caller, current_caller, require_admin, require_user
from dining.api.schemas import (
    RankingEntryResponse,
    ReactionResponse,
    RatingResponse,
    RegisterRestaurantRequest,
    RestaurantDetailResponse,
    RestaurantIdResponse,
    RestaurantPageResponse,
    RestaurantResponse,
    ReviewPageResponse,
    ReviewResponse,
    ReviseReviewRequest,
    StatusResponse,
    WriteReviewRequest,
)
from dining.exceptions import RestaurantNotFoundError
from dining.rating.aggregation import recompute
from dining.rating.ranking import ranking
from dining.rating.statistics import restaurant_stats, review_stats
from dining.restaurant.approval import ApproveRestaurant
from dining.restaurant.registration import RegisterRestaurant
from dining.restaurant.restaurant import Restaurant
from dining.review import ledger
from dining.review.review import ReactionKind

restaurant_router = APIRouter(prefix="/restaurants", tags=["restaurants"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def _review_page(result) -> ReviewPageResponse:
    return ReviewPageResponse(
        reviews=[ReviewResponse(**review.to_summary()) for review in result["reviews"]],
        pagination=result["pagination"],
    )


# ---------------------------------------------------------------------------
# Restaurants
# ---------------------------------------------------------------------------
@restaurant_router.post("", status_code=201, response_model=RestaurantIdResponse)
async def register_restaurant(
    body: RegisterRestaurantRequest,
    caller: Caller = Depends(require_user),
) -> RestaurantIdResponse:
    """Register a restaurant; non-admin registrations wait for approval."""
    command = RegisterRestaurant(
        name=body.name,
        description=body.description,
        category=body.category,
        address=body.address,
        cuisine=json.dumps(body.cuisine) if body.cuisine else None,
        price_range=body.price_range,
        image=body.image,
        registered_by_admin=caller.is_admin,
    )
    restaurant_id = current_domain.process(command, asynchronous=False)
    return RestaurantIdResponse(restaurant_id=restaurant_id, approved=caller.is_admin)


@restaurant_router.put("/{restaurant_id}/approve", response_model=StatusResponse)
async def approve_restaurant(restaurant_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    current_domain.process(ApproveRestaurant(restaurant_id=restaurant_id), asynchronous=False)
    return StatusResponse()


@restaurant_router.get("", response_model=RestaurantPageResponse)
async def list_restaurants(
    category: str | None = None,
    search: str | None = None,
    min_rating: float | None = Query(default=None, ge=0, le=5),
    approved: bool | None = None,
    sort_by: str = "rating",
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    caller: Caller = Depends(current_caller),
) -> RestaurantPageResponse:
    """List restaurants. Only admins can see restaurants pending approval."""
    if not caller.is_admin:
        approved = True
    result = current_domain.repository_for(Restaurant).search(
        category=category,
        search=search,
        min_rating=min_rating,
        approved=approved,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return RestaurantPageResponse(
        restaurants=[RestaurantResponse(**r.to_summary()) for r in result["restaurants"]],
        pagination=result["pagination"],
    )


@restaurant_router.get("/ranking", response_model=list[RankingEntryResponse])
async def restaurant_ranking(
    category: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
) -> list[RankingEntryResponse]:
    """Approved restaurants ordered by weighted score."""
    return [RankingEntryResponse(**entry) for entry in ranking(category=category, limit=limit)]


@restaurant_router.get("/stats")
async def restaurant_statistics(caller: Caller = Depends(require_admin)) -> dict:
    return restaurant_stats()


@restaurant_router.get("/{restaurant_id}", response_model=RestaurantDetailResponse)
async def get_restaurant(
    restaurant_id: str,
    caller: Caller = Depends(current_caller),
) -> RestaurantDetailResponse:
    """A restaurant with its five most recent reviews."""
    restaurant = current_domain.repository_for(Restaurant).find_by_id(restaurant_id)
    if restaurant is None or (not restaurant.approved and not caller.is_admin):
        raise RestaurantNotFoundError(restaurant_id=restaurant_id)

    recent = ledger.reviews_for_restaurant(restaurant_id, page=1, limit=5)
    return RestaurantDetailResponse(
        **restaurant.to_summary(),
        recent_reviews=[ReviewResponse(**review.to_summary()) for review in recent["reviews"]],
    )


@restaurant_router.post("/{restaurant_id}/rating/recompute", response_model=RatingResponse)
async def recompute_rating(restaurant_id: str, caller: Caller = Depends(require_admin)) -> RatingResponse:
    """Recompute a restaurant's rating after a failed aggregation."""
    return RatingResponse(**recompute(restaurant_id))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewResponse)
async def write_review(body: WriteReviewRequest, caller: Caller = Depends(require_user)) -> ReviewResponse:
    """Review an approved restaurant (one review per user and restaurant)."""
    review = ledger.create_review(
        user_id=caller.user_id,
        restaurant_id=body.restaurant_id,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewResponse(**review.to_summary())


@review_router.get("", response_model=ReviewPageResponse)
async def list_reviews(
    restaurant_id: str | None = None,
    user_id: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ReviewPageResponse:
    result = ledger.all_reviews(
        restaurant_id=restaurant_id,
        user_id=user_id,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return _review_page(result)


@review_router.get("/stats")
async def review_statistics() -> dict:
    return review_stats()


@review_router.get("/restaurant/{restaurant_id}", response_model=ReviewPageResponse)
async def restaurant_reviews(
    restaurant_id: str,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ReviewPageResponse:
    return _review_page(ledger.reviews_for_restaurant(restaurant_id, page=page, limit=limit))


@review_router.get("/user/{user_id}", response_model=ReviewPageResponse)
async def user_reviews(
    user_id: str,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ReviewPageResponse:
    return _review_page(ledger.reviews_by_user(user_id, page=page, limit=limit))


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str) -> ReviewResponse:
    return ReviewResponse(**ledger.get_review(review_id).to_summary())


@review_router.put("/{review_id}", response_model=ReviewResponse)
async def revise_review(
    review_id: str,
    body: ReviseReviewRequest,
    caller: Caller = Depends(require_user),
) -> ReviewResponse:
    """Edit your own review."""
    review = ledger.update_review(
        review_id,
        editor_user_id=caller.user_id,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewResponse(**review.to_summary())


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, caller: Caller = Depends(require_user)) -> StatusResponse:
    """Delete your own review; administrators can delete any review."""
    ledger.delete_review(review_id, requester_user_id=caller.user_id, is_admin=caller.is_admin)
    return StatusResponse()


@review_router.post("/{review_id}/like", response_model=ReviewResponse)
async def like_review(review_id: str, caller: Caller = Depends(require_user)) -> ReviewResponse:
    review = ledger.add_reaction(review_id, caller.user_id, ReactionKind.LIKE.value)
    return ReviewResponse(**review.to_summary())


@review_router.post("/{review_id}/dislike", response_model=ReviewResponse)
async def dislike_review(review_id: str, caller: Caller = Depends(require_user)) -> ReviewResponse:
    review = ledger.add_reaction(review_id, caller.user_id, ReactionKind.DISLIKE.value)
    return ReviewResponse(**review.to_summary())


@review_router.get("/{review_id}/reactions/{user_id}", response_model=ReactionResponse)
async def user_reaction(review_id: str, user_id: str) -> ReactionResponse:
    reaction = ledger.get_user_reaction(review_id, user_id)
    return ReactionResponse(
        review_id=review_id,
        user_id=user_id,
        kind=reaction.kind if reaction else None,
    )
