from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class IngredientItem(BaseModel):
    name: str
    quantity: str = ""


class RecipeResponse(BaseModel):
    id: UUID
    title: str
    description: str | None
    ingredients: list[IngredientItem]
    steps: list[str] | None
    cuisine_type: str | None
    dietary_preference: str | None
    difficulty_level: str | None
    meal_type: str | None
    allergens: str | None
    calories: float | None
    protein: float | None
    carbs: float | None
    fats: float | None
    cooking_time: int | None
    servings: int | None
    image_url: str | None
    rating: float
    rating_count: int
    is_favorite: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class RecipeListResponse(BaseModel):
    """Lighter response for list views (no ingredients/steps)."""
    id: UUID
    title: str
    description: str | None
    cuisine_type: str | None
    dietary_preference: str | None
    difficulty_level: str | None
    meal_type: str | None
    cooking_time: int | None
    servings: int | None
    calories: float | None
    image_url: str | None
    rating: float
    rating_count: int
    is_favorite: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class RecipeMatchResponse(RecipeResponse):
    match_percentage: int
    missing_ingredients: list[str]


class FavoriteToggleResponse(BaseModel):
    message: str
    is_favorite: bool
