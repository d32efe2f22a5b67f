"""
Account service: sign-up with email verification, login and password recovery.

Verification status only moves one way: an account is created unverified and
becomes verified exactly once, by presenting its current, unexpired code.
The same code/expiry columns back the password-reset flow.
"""

import logging
import re
import secrets
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from cookmate.config import get_settings
from cookmate.database import as_utc
from cookmate.errors import (
    AuthenticationError, ConflictError, NotFoundError,
    UpstreamError, ValidationError, VerificationRequiredError,
)
from cookmate.models.user import User, UserPreference
from cookmate.services.email import EmailClient, EmailDeliveryError, build_otp_email
from cookmate.services.preferences import get_preferences
from cookmate.utils.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def _find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def _require_by_email(db: Session, email: str, message: str = "User not found") -> User:
    user = _find_by_email(db, email)
    if not user:
        raise NotFoundError(message)
    return user


def _check_password_length(password: str) -> None:
    minimum = get_settings().MIN_PASSWORD_LENGTH
    if len(password) < minimum:
        raise ValidationError(f"Password must be at least {minimum} characters")


def _issue_otp(user: User) -> str:
    code = generate_otp()
    user.verification_otp = code
    user.otp_expiry = datetime.now(timezone.utc) + timedelta(
        minutes=get_settings().OTP_EXPIRY_MINUTES
    )
    return code


def _check_otp(user: User, code: str, expired_message: str, invalid_message: str) -> None:
    expiry = as_utc(user.otp_expiry)
    if not user.verification_otp or expiry is None or datetime.now(timezone.utc) > expiry:
        raise ValidationError(expired_message)
    submitted = (code or "").strip().encode("utf-8")
    if not secrets.compare_digest(user.verification_otp.encode("utf-8"), submitted):
        raise ValidationError(invalid_message)


def _send_otp(mailer: EmailClient, user: User, code: str, purpose: str) -> None:
    subject, html_body, text_body = build_otp_email(
        user.full_name, code, purpose, get_settings().OTP_EXPIRY_MINUTES
    )
    mailer.send(user.email, subject, html_body, text_body)


def register(
    db: Session,
    mailer: EmailClient,
    full_name: str,
    email: str,
    password: str,
    date_of_birth: date | None = None,
) -> User:
    full_name = (full_name or "").strip()
    email = normalize_email(email)
    if not full_name or not email or not password:
        raise ValidationError("All fields are required")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    _check_password_length(password)
    if _find_by_email(db, email):
        raise ConflictError("User already exists with this email")

    user = User(
        full_name=full_name,
        email=email,
        username=email.split("@")[0],
        password_hash=hash_password(password),
        date_of_birth=date_of_birth,
        email_verified=False,
    )
    code = _issue_otp(user)
    db.add(user)
    db.commit()
    db.refresh(user)

    try:
        _send_otp(mailer, user, code, "verify")
    except EmailDeliveryError:
        logger.exception("Verification email to %s failed; removing account", email)
        _remove_unverified(db, user)
        raise UpstreamError("Failed to send verification email. Please try again.")

    logger.info("User registered (pending verification): %s", email)
    return user


def _remove_unverified(db: Session, user: User) -> None:
    """Compensating delete after a failed send; failures are logged only."""
    try:
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Could not remove unverified account %s", user.id)


def verify(db: Session, email: str, code: str) -> User:
    user = _require_by_email(db, email)
    if user.email_verified:
        raise ValidationError("Email already verified")
    _check_otp(
        user, code,
        expired_message="OTP has expired. Please request a new one.",
        invalid_message="Invalid OTP",
    )
    user.email_verified = True
    user.verification_otp = None
    user.otp_expiry = None
    db.commit()
    logger.info("Email verified: %s", user.email)
    return user


def resend(db: Session, mailer: EmailClient, email: str) -> None:
    user = _require_by_email(db, email)
    if user.email_verified:
        raise ValidationError("Email already verified")
    code = _issue_otp(user)
    db.commit()
    try:
        _send_otp(mailer, user, code, "verify")
    except EmailDeliveryError:
        logger.exception("Resending verification code to %s failed", user.email)
        raise UpstreamError("Failed to send verification email. Please try again.")
    logger.info("OTP resent to: %s", user.email)


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    user = _find_by_email(db, email)
    if not user or not verify_password(password or "", user.password_hash):
        logger.warning("Rejected login for %s", normalize_email(email))
        raise AuthenticationError("Invalid email or password")
    if not user.email_verified:
        raise VerificationRequiredError()
    logger.info("User logged in: %s", user.email)
    return create_access_token(user), user


def forgot_password(db: Session, mailer: EmailClient, email: str) -> None:
    user = _require_by_email(db, email, "No account found with this email")
    code = _issue_otp(user)
    db.commit()
    try:
        _send_otp(mailer, user, code, "reset")
    except EmailDeliveryError:
        logger.exception("Password reset email to %s failed", user.email)
        raise UpstreamError("Failed to send password reset email. Please try again.")
    logger.info("Password reset OTP sent to: %s", user.email)


def reset_password(db: Session, email: str, code: str, new_password: str) -> None:
    _check_password_length(new_password or "")
    user = _require_by_email(db, email)
    _check_otp(
        user, code,
        expired_message="Reset code has expired. Please request a new one.",
        invalid_message="Invalid reset code",
    )
    user.password_hash = hash_password(new_password)
    user.verification_otp = None
    user.otp_expiry = None
    db.commit()
    logger.info("Password reset successful for: %s", user.email)


def change_password(db: Session, user: User, old_password: str, new_password: str) -> None:
    if not old_password or not new_password:
        raise ValidationError("Both passwords required")
    _check_password_length(new_password)
    if not verify_password(old_password, user.password_hash):
        raise ValidationError("Old password is incorrect")
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for user: %s", user.id)


def update_profile(db: Session, user: User, full_name: str, date_of_birth: date | None) -> User:
    full_name = (full_name or "").strip()
    if not full_name:
        raise ValidationError("Full name is required")
    user.full_name = full_name
    user.date_of_birth = date_of_birth
    db.commit()
    db.refresh(user)
    return user


def get_profile(db: Session, user: User) -> tuple[User, UserPreference | None]:
    return user, get_preferences(db, user)
