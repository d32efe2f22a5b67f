from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, field_validator

from cookmate.utils.ingredients import split_csv_list


class PreferenceUpdate(BaseModel):
    """Whole-record preference save; omitted fields are stored as empty."""
    diet_type: str | None = None
    allergies: list[str] | str | None = None
    cuisines: list[str] | str | None = None
    skill_level: str | None = None
    meal_goal: str | None = None
    health_goal: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("allergies", "cuisines", mode="after")
    @classmethod
    def _to_list(cls, value):
        return split_csv_list(value)


class PreferenceResponse(BaseModel):
    id: UUID
    user_id: UUID
    diet_type: str | None
    allergies: list[str]
    cuisines: list[str]
    skill_level: str | None
    meal_goal: str | None
    health_goal: str | None
    updated_at: datetime

    model_config = {"from_attributes": True}
