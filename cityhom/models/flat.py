"""
Flat listing model.
"""

from cityhom.database import Base
from cityhom.models.listing import UnitMixin, SpaceCategory


class Flat(UnitMixin, Base):
    """A self-contained flat with bedrooms, bathrooms and kitchens."""

    __tablename__ = "flats"

    category = SpaceCategory.FLAT
