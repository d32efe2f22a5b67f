from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.errors import NotFoundError
from cookmate.models.user import User
from cookmate.schemas.preference import PreferenceUpdate, PreferenceResponse
from cookmate.services.preferences import get_preferences, save_preferences
from cookmate.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=PreferenceResponse)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prefs = get_preferences(db, current_user)
    if prefs is None:
        raise NotFoundError("No preferences found")
    return prefs


@router.put("/", response_model=PreferenceResponse)
def update_preferences(
    body: PreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return save_preferences(db, current_user, body.model_dump())
