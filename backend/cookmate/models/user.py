from sqlalchemy import Column, Uuid, String, Boolean, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from cookmate.database import Base, BaseMixin


class User(BaseMixin, Base):
    __tablename__ = "users"

    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    date_of_birth = Column(Date)
    email_verified = Column(Boolean, default=False, nullable=False)
    verification_otp = Column(String(6))
    otp_expiry = Column(DateTime(timezone=True))

    preference = relationship(
        "UserPreference", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    favorites = relationship("Favorite", back_populates="user", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="user", cascade="all, delete-orphan")
    grocery_entries = relationship("GroceryEntry", back_populates="user", cascade="all, delete-orphan")


class UserPreference(BaseMixin, Base):
    __tablename__ = "user_preferences"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    diet_type = Column(String)
    allergies = Column(JSON, default=list)
    cuisines = Column(JSON, default=list)
    skill_level = Column(String)
    meal_goal = Column(String)
    health_goal = Column(String)

    user = relationship("User", back_populates="preference")
