"""
Recipe query service: filter-driven catalog retrieval.

Every filter here is mandatory: when a dimension is supplied it must match,
and supplied dimensions are AND-ed together. Ranking by partial match lives
in ``cookmate.services.match_score``, not in these queries.
"""

import logging
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from cookmate.errors import NotFoundError
from cookmate.models.recipe import Favorite, Recipe
from cookmate.models.user import User
from cookmate.services.match_score import normalize_terms
from cookmate.services.preferences import get_preferences
from cookmate.utils.pagination import paginate

logger = logging.getLogger(__name__)

PLACEHOLDERS = {"", "none", "(none)"}
FALLBACK_LIMIT = 20

SORTS = {
    "recency": (Recipe.created_at.desc(),),
    "rating": (Recipe.rating.desc(),),
    "popularity": (Recipe.rating.desc(), Recipe.created_at.desc()),
}


def _meaningful(values) -> list[str]:
    return [v.strip() for v in values or [] if v and v.strip().lower() not in PLACEHOLDERS]


def _exclude_allergens(q: Query, allergies) -> Query:
    for allergen in _meaningful(allergies):
        q = q.filter(or_(Recipe.allergens.is_(None), ~Recipe.allergens.ilike(f"%{allergen}%")))
    return q


def _by_rating(q: Query) -> Query:
    return q.order_by(Recipe.rating.desc(), Recipe.created_at.desc())


def favorite_ids(db: Session, user: User | None, recipe_ids=None) -> set[UUID]:
    if user is None:
        return set()
    q = db.query(Favorite.recipe_id).filter(Favorite.user_id == user.id)
    if recipe_ids is not None:
        q = q.filter(Favorite.recipe_id.in_(list(recipe_ids)))
    return {row[0] for row in q.all()}


def list_all(
    db: Session,
    meal_type: str | None = None,
    cuisine: str | None = None,
    search: str | None = None,
    sort: str = "recency",
    skip: int = 0,
    limit: int = 100,
) -> dict:
    q = db.query(Recipe)
    if meal_type and meal_type.strip():
        q = q.filter(Recipe.meal_type == meal_type.strip())
    if cuisine and cuisine.strip():
        q = q.filter(Recipe.cuisine_type == cuisine.strip())
    if search and search.strip():
        term = search.strip()
        q = q.filter(or_(
            Recipe.title.icontains(term, autoescape=True),
            Recipe.description.icontains(term, autoescape=True),
            Recipe.ingredient_text.icontains(term, autoescape=True),
        ))
    q = q.order_by(*SORTS.get(sort, SORTS["recency"]))
    return paginate(q, skip, limit)


def search(
    db: Session,
    user: User | None,
    ingredients: list[str],
    difficulty: str | None = None,
    meal_types: list[str] | None = None,
    dietary: list[str] | None = None,
    cuisines: list[str] | None = None,
) -> list[Recipe]:
    q = db.query(Recipe)
    for term in normalize_terms(ingredients):
        q = q.filter(Recipe.ingredient_text.contains(term, autoescape=True))
    if dietary:
        q = q.filter(Recipe.dietary_preference.in_(dietary))
    if difficulty:
        q = q.filter(Recipe.difficulty_level == difficulty)
    if meal_types:
        q = q.filter(Recipe.meal_type.in_(meal_types))
    if cuisines:
        q = q.filter(Recipe.cuisine_type.in_(cuisines))
    if user is not None:
        prefs = get_preferences(db, user)
        if prefs is not None:
            q = _exclude_allergens(q, prefs.allergies)
    results = _by_rating(q).all()
    logger.info("Ingredient search %s matched %d recipes", ingredients, len(results))
    return results


def diet_filter(diet_type: str):
    # Non-Veg eaters also get vegetarian dishes; the reverse never holds.
    if diet_type == "Non-Veg":
        return Recipe.dietary_preference.in_(["Non-Veg", "Veg"])
    return Recipe.dietary_preference == diet_type


def recommended(db: Session, user: User | None) -> list[Recipe]:
    prefs = get_preferences(db, user) if user is not None else None
    if prefs is None:
        return db.query(Recipe).order_by(Recipe.rating.desc()).limit(FALLBACK_LIMIT).all()

    q = db.query(Recipe)
    if prefs.diet_type and prefs.diet_type.strip().lower() not in PLACEHOLDERS:
        q = q.filter(diet_filter(prefs.diet_type.strip()))
    if prefs.meal_goal and prefs.meal_goal.strip().lower() not in PLACEHOLDERS:
        q = q.filter(Recipe.meal_type == prefs.meal_goal.strip())
    cuisines = _meaningful(prefs.cuisines)
    if cuisines:
        q = q.filter(Recipe.cuisine_type.in_(cuisines))
    q = _exclude_allergens(q, prefs.allergies)

    results = _by_rating(q).all()
    if not results:
        logger.info("No recipes match all preferences for user %s", user.id)
    return results


def get_by_id(db: Session, recipe_id: UUID) -> Recipe:
    recipe = db.get(Recipe, recipe_id)
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


def toggle_favorite(db: Session, user: User, recipe_id: UUID) -> bool:
    get_by_id(db, recipe_id)
    existing = db.query(Favorite).filter(
        Favorite.user_id == user.id, Favorite.recipe_id == recipe_id
    ).first()
    if existing:
        db.delete(existing)
        db.commit()
        return False
    db.add(Favorite(user_id=user.id, recipe_id=recipe_id))
    db.commit()
    return True


def remove_favorite(db: Session, user: User, recipe_id: UUID) -> None:
    db.query(Favorite).filter(
        Favorite.user_id == user.id, Favorite.recipe_id == recipe_id
    ).delete()
    db.commit()


def list_favorites(db: Session, user: User) -> list[Recipe]:
    return (
        db.query(Recipe)
        .join(Favorite, Favorite.recipe_id == Recipe.id)
        .filter(Favorite.user_id == user.id)
        .order_by(Favorite.created_at.desc())
        .all()
    )
