"""
Ingredient match scoring.

A fixed linear heuristic ranking how well a recipe fits what the caller has
on hand. It is display-only: scores are never stored and the search query
does not use them to include or exclude recipes.

Weights: ingredients 50, dietary 20, difficulty 10, meal type 10, cuisine 10.
A dimension the caller left empty counts as a full match.
"""

import math
from typing import Iterable, Sequence

WEIGHTS = {
    "ingredients": 50,
    "dietary": 20,
    "difficulty": 10,
    "meal_type": 10,
    "cuisine": 10,
}


def normalize_terms(ingredients: Iterable[str] | None) -> list[str]:
    """Trimmed, lower-cased caller terms; blanks dropped."""
    return [t.strip().lower() for t in ingredients or [] if t and t.strip()]


def _names(recipe) -> list[str]:
    return list(recipe.ingredient_names)


def _list_component(weight: int, wanted: Sequence[str] | None, actual: str | None) -> float:
    if not wanted:
        return weight
    return weight if actual in wanted else 0


def match_percentage(
    recipe,
    ingredients: Sequence[str],
    difficulty: str | None = None,
    meal_types: Sequence[str] | None = None,
    dietary: Sequence[str] | None = None,
    cuisines: Sequence[str] | None = None,
) -> int:
    """Score ``recipe`` from 0 to 100 against the caller's ingredients and filters."""
    score = 0.0

    terms = normalize_terms(ingredients)
    if terms:
        text = "\n".join(_names(recipe)).lower()
        found = sum(1 for term in terms if term in text)
        score += WEIGHTS["ingredients"] * found / len(terms)

    score += _list_component(WEIGHTS["dietary"], dietary, recipe.dietary_preference)

    if difficulty:
        if recipe.difficulty_level == difficulty:
            score += WEIGHTS["difficulty"]
    else:
        score += WEIGHTS["difficulty"]

    score += _list_component(WEIGHTS["meal_type"], meal_types, recipe.meal_type)
    score += _list_component(WEIGHTS["cuisine"], cuisines, recipe.cuisine_type)

    # half-up, so 62.5 scores 63
    return int(math.floor(score + 0.5))


def missing_ingredients(recipe, ingredients: Iterable[str]) -> list[str]:
    """Recipe ingredients the caller has nothing for.

    A caller term covers a recipe ingredient when either one contains the
    other, ignoring case.
    """
    have = normalize_terms(ingredients)
    missing = []
    for name in _names(recipe):
        lowered = name.lower()
        if not any(term in lowered or lowered in term for term in have):
            missing.append(name)
    return missing


def rank(recipes, ingredients: Sequence[str], **filters) -> list[tuple[object, int]]:
    """Pair each recipe with its score, best first; ties keep input order."""
    scored = [(r, match_percentage(r, ingredients, **filters)) for r in recipes]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
