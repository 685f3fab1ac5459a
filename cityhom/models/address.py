"""
Address model. Each user has at most one address.
"""

from sqlalchemy import String, Boolean, Uuid, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from cityhom.database import Base
from typing import Optional
import uuid


class Address(Base):
    """Postal address belonging to a single user."""

    __tablename__ = "addresses"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
        comment="Owning user - one address per user"
    )
    country: Mapped[str] = mapped_column(String(50), nullable=False, default="nepal")
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    chowk: Mapped[str] = mapped_column(String(50), nullable=False)
    street: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    house_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
