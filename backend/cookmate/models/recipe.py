from sqlalchemy import Column, Uuid, String, Integer, Float, Text, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from cookmate.database import Base, BaseMixin


def ingredient_search_text(ingredients: list[dict]) -> str:
    return "\n".join((i.get("name") or "").strip().lower() for i in ingredients)


class Recipe(BaseMixin, Base):
    __tablename__ = "recipes"

    title = Column(String, nullable=False)
    description = Column(Text)
    # ordered [{"name": ..., "quantity": ...}]
    ingredients = Column(JSON, default=list, nullable=False)
    ingredient_text = Column(Text, default="", nullable=False)
    steps = Column(JSON, default=list)
    cuisine_type = Column(String, index=True)
    dietary_preference = Column(String, index=True)
    difficulty_level = Column(String)
    meal_type = Column(String, index=True)
    allergens = Column(Text)
    calories = Column(Float)
    protein = Column(Float)
    carbs = Column(Float)
    fats = Column(Float)
    cooking_time = Column(Integer)
    servings = Column(Integer)
    image_url = Column(String)
    rating = Column(Float, default=0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)

    ratings = relationship("Rating", back_populates="recipe", cascade="all, delete-orphan")

    def set_ingredients(self, pairs: list[dict]) -> None:
        self.ingredients = [
            {"name": p["name"], "quantity": p.get("quantity") or ""} for p in pairs
        ]
        self.ingredient_text = ingredient_search_text(self.ingredients)

    @property
    def ingredient_names(self) -> list[str]:
        return [i["name"] for i in self.ingredients or []]


class Favorite(BaseMixin, Base):
    __tablename__ = "user_favorites"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),)

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipe_id = Column(Uuid(as_uuid=True), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="favorites")
    recipe = relationship("Recipe")
