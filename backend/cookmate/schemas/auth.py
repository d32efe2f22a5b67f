from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel

from cookmate.schemas.preference import PreferenceResponse


class RegisterRequest(BaseModel):
    full_name: str
    email: str
    password: str
    date_of_birth: date | None = None

    model_config = {"extra": "forbid"}


class VerifyOTPRequest(BaseModel):
    email: str
    otp: str

    model_config = {"extra": "forbid"}


class EmailRequest(BaseModel):
    email: str

    model_config = {"extra": "forbid"}


class LoginRequest(BaseModel):
    email: str
    password: str

    model_config = {"extra": "forbid"}


class ResetPasswordRequest(BaseModel):
    email: str
    otp: str
    new_password: str

    model_config = {"extra": "forbid"}


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str

    model_config = {"extra": "forbid"}


class ProfileUpdate(BaseModel):
    full_name: str
    date_of_birth: date | None = None

    model_config = {"extra": "forbid"}


class UserResponse(BaseModel):
    id: UUID
    full_name: str
    username: str
    email: str
    date_of_birth: date | None
    created_at: datetime

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse
    requires_verification: bool = True


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class ProfileResponse(BaseModel):
    user: UserResponse
    preferences: PreferenceResponse | None = None
