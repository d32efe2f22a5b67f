"""
Recipe catalog CSV import and export.

Columns: title, description, ingredients, quantity, steps, cuisine_type,
dietary_preference, difficulty_level, meal_type, allergens, calories,
protein, carbs, fats, cooking_time, servings, image_url.

``ingredients`` and ``quantity`` are parallel delimited lists (see
``cookmate.utils.ingredients``); ``steps`` is pipe-separated.
"""

import csv
import io
import logging

from sqlalchemy.orm import Session

from cookmate.models.recipe import Recipe
from cookmate.utils.ingredients import IngredientParityError, pair_ingredients, split_steps

logger = logging.getLogger(__name__)

COLUMNS = [
    "title", "description", "ingredients", "quantity", "steps",
    "cuisine_type", "dietary_preference", "difficulty_level", "meal_type",
    "allergens", "calories", "protein", "carbs", "fats",
    "cooking_time", "servings", "image_url",
]

_TEXT_FIELDS = (
    "description", "cuisine_type", "dietary_preference",
    "difficulty_level", "meal_type", "allergens", "image_url",
)
_FLOAT_FIELDS = ("calories", "protein", "carbs", "fats")
_INT_FIELDS = ("cooking_time", "servings")


class RowError(ValueError):
    pass


def _text(row: dict, key: str) -> str | None:
    return (row.get(key) or "").strip() or None


def _number(row: dict, key: str, cast):
    raw = (row.get(key) or "").strip()
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError:
        raise RowError(f"invalid {key} '{raw}'")


def recipe_from_row(row: dict) -> Recipe:
    """Build an unsaved Recipe from one CSV row; raises RowError."""
    title = _text(row, "title")
    if not title:
        raise RowError("missing title")

    try:
        pairs = pair_ingredients(row.get("ingredients"), row.get("quantity"))
    except IngredientParityError as exc:
        raise RowError(f"ingredient/quantity mismatch ({exc})")

    recipe = Recipe(title=title, steps=split_steps(row.get("steps")))
    recipe.set_ingredients(pairs)
    for key in _TEXT_FIELDS:
        setattr(recipe, key, _text(row, key))
    for key in _FLOAT_FIELDS:
        setattr(recipe, key, _number(row, key, float))
    for key in _INT_FIELDS:
        setattr(recipe, key, _number(row, key, int))
    return recipe


def import_csv(db: Session, text: str) -> dict:
    reader = csv.DictReader(io.StringIO(text))

    items_created = []
    errors = []
    for row_num, row in enumerate(reader, start=2):
        try:
            recipe = recipe_from_row(row)
        except RowError as exc:
            errors.append(f"Row {row_num}: {exc}, skipped")
            continue
        db.add(recipe)
        items_created.append({"title": recipe.title, "cuisine_type": recipe.cuisine_type})

    db.commit()
    logger.info("Imported %d recipes (%d rows skipped)", len(items_created), len(errors))
    return {
        "imported": len(items_created),
        "errors": errors,
        "items": items_created,
    }


def export_csv(db: Session) -> str:
    recipes = db.query(Recipe).order_by(Recipe.created_at).all()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(COLUMNS)
    for recipe in recipes:
        ingredients = recipe.ingredients or []
        row = {
            "title": recipe.title,
            "ingredients": "\n".join(i["name"] for i in ingredients),
            "quantity": "\n".join(i.get("quantity") or "" for i in ingredients),
            "steps": "|".join(recipe.steps or []),
        }
        for key in _TEXT_FIELDS + _FLOAT_FIELDS + _INT_FIELDS:
            row[key] = getattr(recipe, key)
        writer.writerow(["" if row[c] is None else row[c] for c in COLUMNS])
    return output.getvalue()
