"""
Room listing model.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from cityhom.database import Base
from cityhom.models.listing import SharedSpaceMixin, SpaceCategory
from typing import Optional


class Room(SharedSpaceMixin, Base):
    """A single room offered by a space provider."""

    __tablename__ = "rooms"

    category = SpaceCategory.ROOM

    home_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
