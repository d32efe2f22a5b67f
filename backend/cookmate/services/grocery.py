import logging
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from cookmate.errors import ConflictError, NotFoundError, ValidationError
from cookmate.models.grocery import GroceryEntry
from cookmate.models.user import User
from cookmate.services.recipe_query import get_by_id

logger = logging.getLogger(__name__)


def _get_entry(db: Session, entry_id: UUID, user: User) -> GroceryEntry:
    entry = db.query(GroceryEntry).filter(
        GroceryEntry.id == entry_id, GroceryEntry.user_id == user.id
    ).first()
    if not entry:
        raise NotFoundError("Grocery item not found")
    return entry


def add_recipe(db: Session, user: User, recipe_id: UUID) -> GroceryEntry:
    """Copy a recipe's ingredients into the user's list, all unchecked."""
    recipe = get_by_id(db, recipe_id)
    exists = db.query(GroceryEntry.id).filter(
        GroceryEntry.user_id == user.id, GroceryEntry.recipe_id == recipe_id
    ).first()
    if exists:
        raise ConflictError("Recipe already in grocery list")

    entry = GroceryEntry(
        user_id=user.id,
        recipe_id=recipe.id,
        items=[
            {"name": i["name"], "quantity": i.get("quantity") or "", "checked": False}
            for i in recipe.ingredients or []
        ],
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Added recipe %s to grocery list of user %s", recipe_id, user.id)
    return entry


def list_entries(db: Session, user: User) -> list[GroceryEntry]:
    return (
        db.query(GroceryEntry)
        .options(joinedload(GroceryEntry.recipe))
        .filter(GroceryEntry.user_id == user.id)
        .order_by(GroceryEntry.created_at.desc())
        .all()
    )


def toggle_item(db: Session, user: User, entry_id: UUID, index: int) -> GroceryEntry:
    entry = _get_entry(db, entry_id, user)
    items = [dict(i) for i in entry.items or []]
    if index < 0 or index >= len(items):
        raise ValidationError("Invalid item index")
    items[index]["checked"] = not items[index].get("checked", False)
    # JSON columns only detect reassignment, not in-place mutation
    entry.items = items
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, user: User, entry_id: UUID) -> None:
    entry = _get_entry(db, entry_id, user)
    db.delete(entry)
    db.commit()


def clear_all(db: Session, user: User) -> int:
    removed = db.query(GroceryEntry).filter(GroceryEntry.user_id == user.id).delete()
    db.commit()
    logger.info("Cleared %d grocery entries for user %s", removed, user.id)
    return removed
