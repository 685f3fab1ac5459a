"""
Pydantic schemas for authentication requests and responses.
Handles signup, login by email or phone number, and issued access tokens.
"""

from pydantic import EmailStr, Field, field_validator, model_validator
from typing import Optional

from cityhom.schemas.base import CamelModel
from cityhom.schemas.user import UserCreate, UserResponse


class SignupRequest(UserCreate):
    """Signup request schema."""


class LoginRequest(CamelModel):
    """Login with either an email address or a phone number."""

    email: Optional[EmailStr] = Field(None, description="User's email address")
    phone_number: Optional[int] = Field(None, gt=0, description="User's phone number")
    password: str = Field(..., min_length=6, max_length=128, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v else v

    @model_validator(mode="after")
    def require_identifier(self):
        """One of email or phone number identifies the account."""
        if not self.email and not self.phone_number:
            raise ValueError("Either email or phone number must be provided")
        return self


class AccessTokenResponse(CamelModel):
    """Access token response schema. The refresh token travels in a cookie."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds", examples=[900])


class AuthResponse(AccessTokenResponse):
    """Signup and login response schema."""

    user: UserResponse
