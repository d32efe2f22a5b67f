from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.models.user import User
from cookmate.schemas.grocery import GroceryEntryResponse, GroceryClearResponse
from cookmate.services import grocery
from cookmate.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=list[GroceryEntryResponse])
def list_grocery(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return grocery.list_entries(db, current_user)


@router.post("/recipes/{recipe_id}", response_model=GroceryEntryResponse, status_code=201)
def add_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return grocery.add_recipe(db, current_user, recipe_id)


@router.put("/{entry_id}/items/{index}/toggle", response_model=GroceryEntryResponse)
def toggle_item(
    entry_id: UUID,
    index: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return grocery.toggle_item(db, current_user, entry_id, index)


@router.delete("/{entry_id}", status_code=204)
def delete_entry(
    entry_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    grocery.delete_entry(db, current_user, entry_id)


@router.delete("/", response_model=GroceryClearResponse)
def clear_grocery(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    removed = grocery.clear_all(db, current_user)
    return GroceryClearResponse(message="Grocery list cleared", removed=removed)
