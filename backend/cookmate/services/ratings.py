"""
Rating aggregator.

One rating per (user, recipe). Every write or delete is followed by a
recompute of the recipe's cached ``rating`` / ``rating_count`` from the full
ratings table. The two steps commit separately, so a failure in between
leaves the cached values stale until the next successful write; the ratings
table stays the source of truth.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from cookmate.errors import NotFoundError, ValidationError
from cookmate.models.rating import Rating
from cookmate.models.recipe import Recipe
from cookmate.models.user import User
from cookmate.services.recipe_query import get_by_id

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


def round_average(value) -> float:
    """Round half-up to one decimal (4.25 -> 4.3)."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _find(db: Session, recipe_id: UUID, user_id: UUID) -> Rating | None:
    return db.query(Rating).filter(
        Rating.recipe_id == recipe_id, Rating.user_id == user_id
    ).first()


def recompute_recipe_rating(db: Session, recipe_id: UUID) -> Recipe:
    avg, count = db.query(func.avg(Rating.rating), func.count(Rating.id)).filter(
        Rating.recipe_id == recipe_id
    ).one()
    recipe = get_by_id(db, recipe_id)
    recipe.rating = round_average(avg)
    recipe.rating_count = count or 0
    db.commit()
    db.refresh(recipe)
    logger.info(
        "Updated recipe %s: rating = %s (%d ratings)",
        recipe_id, recipe.rating, recipe.rating_count,
    )
    return recipe


def upsert_rating(
    db: Session,
    recipe_id: UUID,
    user: User,
    score: int,
    comment: str | None = None,
) -> tuple[Rating, bool, Recipe]:
    """Create or overwrite the caller's rating. Returns (rating, created, recipe)."""
    if score is None or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(f"Rating must be between {MIN_SCORE} and {MAX_SCORE}")
    get_by_id(db, recipe_id)

    rating = _find(db, recipe_id, user.id)
    created = rating is None
    if created:
        rating = Rating(recipe_id=recipe_id, user_id=user.id, rating=score, comment=comment)
        db.add(rating)
    else:
        rating.rating = score
        rating.comment = comment
        rating.created_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(rating)

    recipe = recompute_recipe_rating(db, recipe_id)
    return rating, created, recipe


def delete_rating(db: Session, recipe_id: UUID, user: User) -> Recipe:
    rating = _find(db, recipe_id, user.id)
    if not rating:
        raise NotFoundError("Rating not found")
    db.delete(rating)
    db.commit()
    return recompute_recipe_rating(db, recipe_id)


def get_for_recipe(db: Session, recipe_id: UUID, user: User | None = None) -> dict:
    get_by_id(db, recipe_id)

    rows = (
        db.query(Rating, User.username, User.full_name)
        .outerjoin(User, Rating.user_id == User.id)
        .filter(Rating.recipe_id == recipe_id)
        .order_by(Rating.created_at.desc())
        .all()
    )
    ratings = []
    for rating, username, full_name in rows:
        ratings.append({
            "id": rating.id,
            "recipe_id": rating.recipe_id,
            "user_id": rating.user_id,
            "rating": rating.rating,
            "comment": rating.comment,
            "created_at": rating.created_at,
            "username": username,
            "full_name": full_name,
        })

    counts = {star: 0 for star in range(MIN_SCORE, MAX_SCORE + 1)}
    for rating, _, _ in rows:
        counts[rating.rating] = counts.get(rating.rating, 0) + 1
    total = len(rows)
    average = sum(r.rating for r, _, _ in rows) / total if total else None

    statistics = {
        "average_rating": round_average(average),
        "total_ratings": total,
        "distribution": {
            star: {
                "count": n,
                "percentage": round_average(n * 100 / total) if total else 0.0,
            }
            for star, n in counts.items()
        },
    }

    user_rating = _find(db, recipe_id, user.id) if user is not None else None
    return {"ratings": ratings, "statistics": statistics, "user_rating": user_rating}


def top_rated(db: Session, limit: int = 10) -> list[Recipe]:
    return (
        db.query(Recipe)
        .filter(Recipe.rating_count > 0)
        .order_by(Recipe.rating.desc(), Recipe.rating_count.desc())
        .limit(limit)
        .all()
    )
