"""
Review API Routes - ratings and comments on movies.

Writing, editing and deleting require authentication and ownership; the
per-user and per-movie listings are public.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_tracker.db import get_app_db
from movie_tracker.dependencies import (
    get_current_user,
    get_listing_service,
    get_movie_resolver,
    get_review_service,
)
from movie_tracker.models import User
from movie_tracker.schemas import (
    MessageResponse,
    MovieInfo,
    ReviewCreateRequest,
    ReviewInfo,
    ReviewUpdateRequest,
    ReviewWithAuthor,
    ReviewWithMovie,
    error_responses,
)
from movie_tracker.services.listing_service import ListingService
from movie_tracker.services.movie_resolver import MovieResolver
from movie_tracker.services.review_service import ReviewService, validate_rating

router = APIRouter(
    prefix="/api/reviews",
    tags=["Reviews"],
    responses=error_responses(400, 401, 404, 422, 502),
)


@router.post("", response_model=ReviewWithMovie, status_code=status.HTTP_201_CREATED)
async def create_review(
    request_data: ReviewCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    resolver: MovieResolver = Depends(get_movie_resolver),
    review_service: ReviewService = Depends(get_review_service),
):
    """Review a movie, creating the movie record first if it is new."""
    user_id = current_user.id
    # Reject a bad score before any movie gets created
    validate_rating(request_data.rating)

    movie = await resolver.resolve(
        request_data.imdb_id, request_data.fallback_descriptor(), db=db
    )
    review = await review_service.create(
        user_id, movie, request_data.rating, request_data.comment, db=db
    )
    return ReviewWithMovie(
        review=ReviewInfo.model_validate(review), movie=MovieInfo.model_validate(movie)
    )


@router.get("/me", response_model=list[ReviewWithMovie])
async def get_my_reviews(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    listing_service: ListingService = Depends(get_listing_service),
):
    """The current user's reviews with movie details, most recent first."""
    return await listing_service.list_reviews_for_user(current_user.id, db=db)


@router.get("/user/{user_id}", response_model=list[ReviewWithMovie])
async def get_user_reviews(
    user_id: UUID,
    db: AsyncSession = Depends(get_app_db),
    listing_service: ListingService = Depends(get_listing_service),
):
    """Public listing of another account's reviews."""
    return await listing_service.list_reviews_for_user_public(user_id, db=db)


@router.get("/movie/{movie_ref}", response_model=list[ReviewWithAuthor])
async def get_movie_reviews(
    movie_ref: str,
    db: AsyncSession = Depends(get_app_db),
    listing_service: ListingService = Depends(get_listing_service),
):
    """All reviews of a movie, addressed by IMDb id or local UUID."""
    return await listing_service.list_reviews_for_movie(movie_ref, db=db)


@router.put("/{review_id}", response_model=ReviewInfo)
async def update_review(
    review_id: UUID,
    request_data: ReviewUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    review_service: ReviewService = Depends(get_review_service),
):
    """Change the rating and/or comment; omitted fields stay as they are."""
    review = await review_service.update(
        current_user.id,
        review_id,
        rating=request_data.rating,
        comment=request_data.comment,
        db=db,
    )
    return ReviewInfo.model_validate(review)


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    review_service: ReviewService = Depends(get_review_service),
):
    await review_service.delete(current_user.id, review_id, db=db)
    return MessageResponse(message="Review deleted")
