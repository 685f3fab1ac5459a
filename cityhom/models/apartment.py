"""
Apartment listing model.
Kept for clients that still post apartments; new units are listed as flats.
"""

from sqlalchemy import Boolean
from sqlalchemy.orm import Mapped, mapped_column
from cityhom.database import Base
from cityhom.models.listing import UnitMixin, SpaceCategory


class Apartment(UnitMixin, Base):
    __tablename__ = "apartments"

    category = SpaceCategory.APARTMENT

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
