from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from neropage.features.profiles.schemas.profile import ProfileResponse, validate_username_value
from neropage.platform.schemas import CamelModel


class SignupRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=8, max_length=128, description="Password must be at least 8 characters")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return validate_username_value(v)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRecord(CamelModel):
    """Stored user, including the password hash. Never returned over the wire."""

    id: str
    username: str
    password_hash: str
    created_at: Optional[datetime] = None


class UserResponse(CamelModel):
    id: str
    username: str


class AuthResponse(CamelModel):
    user: UserResponse
    profile: ProfileResponse
    access_token: str
    token_type: str = "bearer"


class MeResponse(CamelModel):
    user: UserResponse
    profile: ProfileResponse
