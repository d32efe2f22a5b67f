from cookmate.models.user import User, UserPreference
from cookmate.models.recipe import Recipe, Favorite
from cookmate.models.rating import Rating
from cookmate.models.grocery import GroceryEntry

__all__ = [
    "User", "UserPreference",
    "Recipe", "Favorite",
    "Rating", "GroceryEntry",
]
