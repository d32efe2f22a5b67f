from cookmate.models import Recipe
from cookmate.services.match_score import match_percentage, missing_ingredients, rank
from cookmate.utils.ingredients import pair_ingredients


def _recipe(ingredients="egg; flour; milk", quantities="2; 1 cup; 250 ml", **fields):
    recipe = Recipe(title=fields.pop("title", "Pancakes"), **fields)
    recipe.set_ingredients(pair_ingredients(ingredients, quantities))
    return recipe


def test_all_requested_ingredients_present_scores_full():
    recipe = _recipe()
    assert match_percentage(recipe, ["egg", "milk"]) == 100
    assert missing_ingredients(recipe, ["egg", "milk"]) == ["flour"]


def test_missing_ingredients_keeps_original_casing():
    recipe = _recipe("Whole Milk; Brown Sugar", "1 cup; 2 tbsp")
    assert missing_ingredients(recipe, ["milk"]) == ["Brown Sugar"]


def test_missing_ingredients_matches_in_either_direction():
    recipe = _recipe("egg; flour", "2; 1 cup")
    # caller's "eggs" contains the recipe's "egg"
    assert missing_ingredients(recipe, ["eggs"]) == ["flour"]


def test_partial_ingredient_match():
    recipe = _recipe()
    # 50 * 1/2 + 20 + 10 + 10 + 10
    assert match_percentage(recipe, ["egg", "butter"]) == 75


def test_score_rounds_half_up():
    recipe = _recipe("egg; flour; milk; salt", "1; 2; 3; 4")
    # 50 * 1/4 + 50 = 62.5
    assert match_percentage(recipe, ["egg", "x", "y", "z"]) == 63


def test_no_ingredients_supplied_scores_filters_only():
    assert match_percentage(_recipe(), []) == 50


def test_filters_that_do_not_match_lose_their_weight():
    recipe = _recipe(
        dietary_preference="Veg", difficulty_level="Easy",
        meal_type="Breakfast", cuisine_type="American",
    )
    assert match_percentage(recipe, ["egg"], dietary=["Vegan"]) == 80
    assert match_percentage(recipe, ["egg"], difficulty="Hard") == 90
    assert match_percentage(recipe, ["egg"], meal_types=["Dinner"]) == 90
    assert match_percentage(recipe, ["egg"], cuisines=["Italian"]) == 90
    assert match_percentage(
        recipe, ["egg"], dietary=["Veg"], difficulty="Easy",
        meal_types=["Breakfast", "Lunch"], cuisines=["American"],
    ) == 100


def test_score_never_drops_when_more_ingredients_match():
    recipe = _recipe()
    have = ["egg", "flour", "milk"]
    misses = ["x", "y", "z"]
    scores = [match_percentage(recipe, have[:k] + misses[k:]) for k in range(4)]
    assert scores == sorted(scores)
    assert scores[0] < scores[-1]


def test_rank_orders_best_first_and_is_stable():
    a = _recipe("egg; milk", "1; 2", title="A")
    b = _recipe("egg; flour", "1; 2", title="B")
    c = _recipe("egg; milk", "1; 2", title="C")
    ranked = rank([b, a, c], ["egg", "milk"])
    assert [r.title for r, _ in ranked] == ["A", "C", "B"]
    assert [score for _, score in ranked] == [100, 100, 75]


def test_caller_terms_are_trimmed_and_case_folded():
    recipe = _recipe()
    assert match_percentage(recipe, [" egg ", "MILK", "  "]) == 100
    assert missing_ingredients(recipe, [" Egg", "milk "]) == ["flour"]
