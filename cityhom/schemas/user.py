"""
Pydantic schemas for user requests and responses.
Handles signup, profile updates and user views that never expose the password.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from cityhom.models.user import UserRole
from cityhom.schemas.base import CamelModel, UrlStr, partial_model


def _check_phone_number(v):
    if v is not None and v <= 0:
        raise ValueError("Phone number must be a positive integer")
    return v


class UserCreate(CamelModel):
    """Schema for creating a new user."""

    name: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="User's display name",
        examples=["sita sharma"]
    )
    email: EmailStr = Field(..., description="User's email address", examples=["sita@example.com"])
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="User's password (minimum 6 characters)"
    )
    phone_number: int = Field(..., description="Unique phone number", examples=[9800000000])
    user_avatar_url: Optional[UrlStr] = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v):
        """Names are stored trimmed and lowercase."""
        if v is None:
            return v
        v = v.strip().lower()
        if len(v) < 3:
            raise ValueError("Name must be at least 3 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip() if v is not None else v

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v):
        return _check_phone_number(v)


UserUpdate = partial_model(UserCreate, "UserUpdate")


class UserAdminUpdate(UserUpdate):
    """Fields only administrators may change."""

    roles: Optional[List[UserRole]] = None
    is_verified: Optional[bool] = None
    is_email_verified: Optional[bool] = None


class UserResponse(CamelModel):
    """User response schema (excluding sensitive data)."""

    id: uuid.UUID
    name: str
    email: str
    phone_number: int
    user_avatar_url: Optional[str] = None
    roles: List[str]
    is_verified: bool
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime


class OwnerSummary(CamelModel):
    """Owner details attached to listings in admin views."""

    id: uuid.UUID
    name: str
    email: str
    phone_number: int
