from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class RatingCreate(BaseModel):
    # Range is enforced by the rating service so the client gets a 400.
    rating: int
    comment: str | None = None

    model_config = {"extra": "forbid"}


class RatingResponse(BaseModel):
    id: UUID
    recipe_id: UUID
    user_id: UUID
    rating: int
    comment: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class RatingWithRater(RatingResponse):
    username: str | None = None
    full_name: str | None = None


class StarBucket(BaseModel):
    count: int
    percentage: float


class RatingStatistics(BaseModel):
    average_rating: float
    total_ratings: int
    distribution: dict[int, StarBucket]


class RecipeRatingsResponse(BaseModel):
    ratings: list[RatingWithRater]
    statistics: RatingStatistics
    user_rating: RatingResponse | None = None


class RatingSaveResponse(BaseModel):
    message: str
    rating: RatingResponse
    recipe_rating: float
    recipe_rating_count: int


class RatingDeleteResponse(BaseModel):
    message: str
    recipe_rating: float
    recipe_rating_count: int
