from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.models.user import User
from cookmate.schemas.rating import (
    RatingCreate, RatingSaveResponse, RatingDeleteResponse, RecipeRatingsResponse,
)
from cookmate.schemas.recipe import RecipeListResponse
from cookmate.services import ratings
from cookmate.utils.auth import get_current_user, get_optional_user

router = APIRouter()


@router.get("/top", response_model=list[RecipeListResponse])
def top_rated(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ratings.top_rated(db, limit)


@router.get("/{recipe_id}", response_model=RecipeRatingsResponse)
def recipe_ratings(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    return ratings.get_for_recipe(db, recipe_id, current_user)


@router.post("/{recipe_id}", response_model=RatingSaveResponse)
def rate_recipe(
    recipe_id: UUID,
    body: RatingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rating, created, recipe = ratings.upsert_rating(
        db, recipe_id, current_user, body.rating, body.comment
    )
    return {
        "message": "Rating added successfully" if created else "Rating updated successfully",
        "rating": rating,
        "recipe_rating": recipe.rating,
        "recipe_rating_count": recipe.rating_count,
    }


@router.delete("/{recipe_id}", response_model=RatingDeleteResponse)
def delete_rating(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    recipe = ratings.delete_rating(db, recipe_id, current_user)
    return {
        "message": "Rating deleted successfully",
        "recipe_rating": recipe.rating,
        "recipe_rating_count": recipe.rating_count,
    }
