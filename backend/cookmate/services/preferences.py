import logging

from sqlalchemy.orm import Session

from cookmate.models.user import User, UserPreference

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = ("diet_type", "allergies", "cuisines", "skill_level", "meal_goal", "health_goal")


def get_preferences(db: Session, user: User) -> UserPreference | None:
    return db.query(UserPreference).filter(UserPreference.user_id == user.id).first()


def save_preferences(db: Session, user: User, data: dict) -> UserPreference:
    """Replace the user's whole preference record (insert on first save)."""
    pref = get_preferences(db, user)
    if pref is None:
        pref = UserPreference(user_id=user.id)
        db.add(pref)
    for field in PREFERENCE_FIELDS:
        value = data.get(field)
        if field in ("allergies", "cuisines"):
            value = list(value or [])
        setattr(pref, field, value)
    db.commit()
    db.refresh(pref)
    logger.info("Preferences saved for user: %s", user.id)
    return pref
