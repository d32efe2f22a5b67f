from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.models.recipe import Recipe
from cookmate.models.user import User
from cookmate.schemas.recipe import (
    RecipeResponse, RecipeListResponse, RecipeMatchResponse,
    FavoriteToggleResponse,
)
from cookmate.services import match_score, recipe_query
from cookmate.utils.auth import get_current_user, get_optional_user
from cookmate.utils.ingredients import split_csv_list

router = APIRouter()


def _with_favorites(db: Session, user: User | None, recipes: list[Recipe], schema=RecipeResponse):
    favorites = recipe_query.favorite_ids(db, user, [r.id for r in recipes])
    return [
        schema.model_validate(r).model_copy(update={"is_favorite": r.id in favorites})
        for r in recipes
    ]


@router.get("/", response_model=dict)
def list_recipes(
    meal_type: str | None = None,
    cuisine: str | None = None,
    search: str | None = None,
    sort: str = Query("recency", pattern="^(recency|rating|popularity)$"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    result = recipe_query.list_all(db, meal_type, cuisine, search, sort, skip, limit)
    result["items"] = _with_favorites(db, current_user, result["items"], RecipeListResponse)
    return result


@router.get("/search/ingredients", response_model=list[RecipeMatchResponse])
def search_by_ingredients(
    ingredients: str | None = None,
    difficulty: str | None = None,
    meal_type: str | None = None,
    dietary: str | None = None,
    cuisine: str | None = None,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    """Recipes containing every listed ingredient, best match first.

    List parameters are comma-separated.
    """
    terms = split_csv_list(ingredients)
    filters = {
        "difficulty": (difficulty or "").strip() or None,
        "meal_types": split_csv_list(meal_type),
        "dietary": split_csv_list(dietary),
        "cuisines": split_csv_list(cuisine),
    }
    recipes = recipe_query.search(db, current_user, terms, **filters)
    favorites = recipe_query.favorite_ids(db, current_user, [r.id for r in recipes])

    results = []
    for recipe, score in match_score.rank(recipes, terms, **filters):
        data = RecipeResponse.model_validate(recipe).model_dump()
        data.update(
            is_favorite=recipe.id in favorites,
            match_percentage=score,
            missing_ingredients=match_score.missing_ingredients(recipe, terms),
        )
        results.append(data)
    return results


@router.get("/recommended", response_model=list[RecipeResponse])
def recommended(
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    return _with_favorites(db, current_user, recipe_query.recommended(db, current_user))


@router.get("/favorites", response_model=list[RecipeResponse])
def list_favorites(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        RecipeResponse.model_validate(r).model_copy(update={"is_favorite": True})
        for r in recipe_query.list_favorites(db, current_user)
    ]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    recipe = recipe_query.get_by_id(db, recipe_id)
    return _with_favorites(db, current_user, [recipe])[0]


@router.post("/{recipe_id}/favorite", response_model=FavoriteToggleResponse)
def toggle_favorite(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    is_favorite = recipe_query.toggle_favorite(db, current_user, recipe_id)
    message = "Added to favorites" if is_favorite else "Removed from favorites"
    return FavoriteToggleResponse(message=message, is_favorite=is_favorite)


@router.delete("/{recipe_id}/favorite", status_code=204)
def remove_favorite(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    recipe_query.remove_favorite(db, current_user, recipe_id)
