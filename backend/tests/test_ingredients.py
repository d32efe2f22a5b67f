import pytest

from cookmate.utils.ingredients import (
    IngredientParityError, pair_ingredients, split_csv_list,
    split_delimited, split_steps,
)


def test_semicolon_list():
    assert split_delimited("egg; flour ;milk;") == ["egg", "flour", "milk"]


def test_newline_takes_precedence_over_semicolon():
    assert split_delimited("salt; pepper\nolive oil") == ["salt; pepper", "olive oil"]


def test_empty_values():
    assert split_delimited(None) == []
    assert split_delimited("") == []
    assert split_steps(None) == []


def test_steps_split_on_pipe():
    assert split_steps("Whisk | Fry||Serve") == ["Whisk", "Fry", "Serve"]


def test_pairs_keep_order():
    pairs = pair_ingredients("egg; flour; milk", "2; 1 cup; 250 ml")
    assert pairs == [
        {"name": "egg", "quantity": "2"},
        {"name": "flour", "quantity": "1 cup"},
        {"name": "milk", "quantity": "250 ml"},
    ]


def test_missing_quantity_column_leaves_quantities_blank():
    assert pair_ingredients("egg; milk", "") == [
        {"name": "egg", "quantity": ""},
        {"name": "milk", "quantity": ""},
    ]


def test_length_mismatch_is_flagged():
    with pytest.raises(IngredientParityError) as exc_info:
        pair_ingredients("egg; flour; milk", "2; 1 cup")
    assert exc_info.value.ingredient_count == 3
    assert exc_info.value.quantity_count == 2


def test_csv_list_accepts_string_or_list():
    assert split_csv_list("Peanuts, Dairy ,") == ["Peanuts", "Dairy"]
    assert split_csv_list(["Gluten", " ", None]) == ["Gluten"]
    assert split_csv_list(None) == []


def test_blank_quantity_keeps_its_position():
    assert pair_ingredients("lettuce\nsalt\noil", "1 head\n\n1 tbsp") == [
        {"name": "lettuce", "quantity": "1 head"},
        {"name": "salt", "quantity": ""},
        {"name": "oil", "quantity": "1 tbsp"},
    ]
    assert pair_ingredients("egg; salt", "2;") == [
        {"name": "egg", "quantity": "2"},
        {"name": "salt", "quantity": ""},
    ]
