from sqlalchemy import Column, Uuid, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from cookmate.database import Base, BaseMixin


class GroceryEntry(BaseMixin, Base):
    """One recipe's shopping items for one user."""

    __tablename__ = "grocery_list"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_grocery_user_recipe"),)

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipe_id = Column(Uuid(as_uuid=True), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    # [{"name": ..., "quantity": ..., "checked": bool}]
    items = Column(JSON, default=list, nullable=False)

    user = relationship("User", back_populates="grocery_entries")
    recipe = relationship("Recipe")

    @property
    def recipe_title(self) -> str | None:
        return self.recipe.title if self.recipe else None

    @property
    def all_checked(self) -> bool:
        return bool(self.items) and all(i.get("checked") for i in self.items)
