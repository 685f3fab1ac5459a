"""
Land listing model.
"""

from cityhom.database import Base
from cityhom.models.listing import ParcelMixin, SpaceCategory


class Land(ParcelMixin, Base):
    """A land parcel. Shares the plot and road columns with houses but has no rooms."""

    __tablename__ = "lands"

    category = SpaceCategory.LAND
