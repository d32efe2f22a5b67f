from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cookmate.config import get_settings
from cookmate.database import get_db
from cookmate.errors import AuthenticationError
from cookmate.models.user import User

_bearer = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: User) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "type": "access",
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRY_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a session token; any failure is an AuthenticationError."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise AuthenticationError("Token is not valid") from exc
    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("Token is not valid")
    return payload


def _user_from_token(db: Session, token: str) -> User:
    payload = decode_token(token)
    try:
        user_id = UUID(payload["sub"])
    except ValueError as exc:
        raise AuthenticationError("Token is not valid") from exc
    user = db.get(User, user_id)
    if not user:
        raise AuthenticationError("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token, authorization denied")
    return _user_from_token(db, credentials.credentials)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User | None:
    """Like get_current_user but anonymous (None) on a missing or bad token."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _user_from_token(db, credentials.credentials)
    except AuthenticationError:
        return None
