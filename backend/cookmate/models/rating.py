from sqlalchemy import Column, Uuid, Integer, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from cookmate.database import Base, BaseMixin


class Rating(BaseMixin, Base):
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_rating_recipe_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_rating_range"),
    )

    recipe_id = Column(Uuid(as_uuid=True), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)

    recipe = relationship("Recipe", back_populates="ratings")
    user = relationship("User", back_populates="ratings")
