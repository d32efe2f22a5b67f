from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.models.user import User
from cookmate.schemas.auth import (
    RegisterRequest, VerifyOTPRequest, EmailRequest, LoginRequest,
    ResetPasswordRequest, ChangePasswordRequest, ProfileUpdate,
    RegisterResponse, TokenResponse, MessageResponse,
    ProfileResponse, UserResponse,
)
from cookmate.services import accounts
from cookmate.services.email import EmailClient, get_email_client
from cookmate.utils.auth import get_current_user

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    mailer: EmailClient = Depends(get_email_client),
):
    user = accounts.register(
        db, mailer, body.full_name, body.email, body.password, body.date_of_birth
    )
    return RegisterResponse(
        message="Registration successful! Please check your email for the verification code.",
        user=UserResponse.model_validate(user),
    )


@router.post("/verify-otp", response_model=MessageResponse)
def verify_otp(body: VerifyOTPRequest, db: Session = Depends(get_db)):
    accounts.verify(db, body.email, body.otp)
    return MessageResponse(message="Email verified successfully! You can now log in.")


@router.post("/resend-otp", response_model=MessageResponse)
def resend_otp(
    body: EmailRequest,
    db: Session = Depends(get_db),
    mailer: EmailClient = Depends(get_email_client),
):
    accounts.resend(db, mailer, body.email)
    return MessageResponse(message="A new OTP has been sent to your email")


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    token, user = accounts.login(db, body.email, body.password)
    return TokenResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: EmailRequest,
    db: Session = Depends(get_db),
    mailer: EmailClient = Depends(get_email_client),
):
    accounts.forgot_password(db, mailer, body.email)
    return MessageResponse(message="Password reset code sent to your email")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    accounts.reset_password(db, body.email, body.otp, body.new_password)
    return MessageResponse(message="Password reset successful! You can now log in.")


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user, prefs = accounts.get_profile(db, current_user)
    return {"user": user, "preferences": prefs}


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return accounts.update_profile(db, current_user, body.full_name, body.date_of_birth)


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    accounts.change_password(db, current_user, body.old_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy.
    return MessageResponse(message="Logged out successfully")
