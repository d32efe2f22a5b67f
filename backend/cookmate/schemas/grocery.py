from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class GroceryItem(BaseModel):
    name: str
    quantity: str = ""
    checked: bool = False


class GroceryEntryResponse(BaseModel):
    id: UUID
    recipe_id: UUID
    recipe_title: str | None
    items: list[GroceryItem]
    all_checked: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class GroceryClearResponse(BaseModel):
    message: str
    removed: int
