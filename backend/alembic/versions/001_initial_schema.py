"""Initial schema: accounts, recipes, favorites, ratings, grocery list

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String, nullable=False),
        sa.Column("email", sa.String, unique=True, index=True, nullable=False),
        sa.Column("username", sa.String, index=True, nullable=False),
        sa.Column("password_hash", sa.String, nullable=False),
        sa.Column("date_of_birth", sa.Date),
        sa.Column("email_verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("verification_otp", sa.String(6)),
        sa.Column("otp_expiry", sa.DateTime(timezone=True)),
        *_timestamps(),
    )

    # --- user_preferences ---
    op.create_table(
        "user_preferences",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False),
        sa.Column("diet_type", sa.String),
        sa.Column("allergies", sa.JSON),
        sa.Column("cuisines", sa.JSON),
        sa.Column("skill_level", sa.String),
        sa.Column("meal_goal", sa.String),
        sa.Column("health_goal", sa.String),
        *_timestamps(),
    )

    # --- recipes ---
    op.create_table(
        "recipes",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("ingredients", sa.JSON, nullable=False),
        sa.Column("ingredient_text", sa.Text, nullable=False, server_default=""),
        sa.Column("steps", sa.JSON),
        sa.Column("cuisine_type", sa.String, index=True),
        sa.Column("dietary_preference", sa.String, index=True),
        sa.Column("difficulty_level", sa.String),
        sa.Column("meal_type", sa.String, index=True),
        sa.Column("allergens", sa.Text),
        sa.Column("calories", sa.Float),
        sa.Column("protein", sa.Float),
        sa.Column("carbs", sa.Float),
        sa.Column("fats", sa.Float),
        sa.Column("cooking_time", sa.Integer),
        sa.Column("servings", sa.Integer),
        sa.Column("image_url", sa.String),
        sa.Column("rating", sa.Float, nullable=False, server_default="0"),
        sa.Column("rating_count", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    # --- user_favorites ---
    op.create_table(
        "user_favorites",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("recipe_id", sa.Uuid(as_uuid=True), sa.ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )

    # --- ratings ---
    op.create_table(
        "ratings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("recipe_id", sa.Uuid(as_uuid=True), sa.ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("recipe_id", "user_id", name="uq_rating_recipe_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_rating_range"),
    )

    # --- grocery_list ---
    op.create_table(
        "grocery_list",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("recipe_id", sa.Uuid(as_uuid=True), sa.ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("items", sa.JSON, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_grocery_user_recipe"),
    )


def downgrade() -> None:
    op.drop_table("grocery_list")
    op.drop_table("ratings")
    op.drop_table("user_favorites")
    op.drop_table("recipes")
    op.drop_table("user_preferences")
    op.drop_table("users")
