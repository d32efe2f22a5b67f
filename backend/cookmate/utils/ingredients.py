"""
Parsing for the legacy delimited recipe columns.

Catalog exports store ingredients and quantities as delimited text (newline
separated, or semicolon separated when there is no newline) and steps as
pipe-separated text. Recipes keep an ordered list of ``{name, quantity}``
pairs instead; these helpers are only used when importing.
"""


class IngredientParityError(ValueError):
    def __init__(self, ingredient_count: int, quantity_count: int):
        super().__init__(
            f"{ingredient_count} ingredients but {quantity_count} quantities"
        )
        self.ingredient_count = ingredient_count
        self.quantity_count = quantity_count


def split_delimited(text: str | None) -> list[str]:
    if not text:
        return []
    sep = "\n" if "\n" in text else ";"
    return [part.strip() for part in text.split(sep) if part.strip()]


def _split_positions(text: str) -> list[str]:
    sep = "\n" if "\n" in text else ";"
    return [part.strip() for part in text.split(sep)]


def split_steps(text: str | None) -> list[str]:
    if not text:
        return []
    return [step.strip() for step in text.split("|") if step.strip()]


def pair_ingredients(ingredients_text: str | None, quantities_text: str | None) -> list[dict]:
    """Zip ingredient names with quantities index-wise.

    An empty quantity column is allowed (every quantity blank). Otherwise
    quantities are positional, so a blank entry stays a blank quantity, and
    the two lists must be the same length.
    """
    names = split_delimited(ingredients_text)
    if not (quantities_text or "").strip():
        quantities = [""] * len(names)
    else:
        quantities = _split_positions(quantities_text)
    if len(quantities) != len(names):
        raise IngredientParityError(len(names), len(quantities))
    return [{"name": n, "quantity": q} for n, q in zip(names, quantities)]


def split_csv_list(value) -> list[str]:
    """Accept ``["a", "b"]`` or ``"a, b"``; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if v is not None and str(v).strip()]
