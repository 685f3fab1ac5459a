"""
House listing model.
"""

from sqlalchemy import String, Integer, BigInteger, JSON
from sqlalchemy.orm import Mapped, mapped_column
from cityhom.database import Base
from cityhom.models.listing import ParcelMixin, SpaceCategory, FurnishStatus
from typing import Any, Dict


class House(ParcelMixin, Base):
    """A whole house, for rent or for sale."""

    __tablename__ = "houses"

    category = SpaceCategory.HOUSE

    phone_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    build_up_area: Mapped[str] = mapped_column(String(100), nullable=False)
    no_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    no_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    no_of_kitchens: Mapped[int] = mapped_column(Integer, nullable=False)
    build_year: Mapped[int] = mapped_column(Integer, nullable=False)
    furnish: Mapped[str] = mapped_column(String(10), nullable=False, default=FurnishStatus.FULL.value)
    no_of_floors: Mapped[int] = mapped_column(Integer, nullable=False)
    no_of_living_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    no_of_parking_spaces: Mapped[int] = mapped_column(Integer, nullable=False)
    facilities: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
