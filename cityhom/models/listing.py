"""
Shared enumerations and column mixins for listing models.
Every listing table is owned by one user and carries location, fare and availability columns.
"""

from sqlalchemy import String, Text, Boolean, Integer, BigInteger, Float, JSON, Uuid, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from typing import Any, Dict, List, Optional
import enum
import uuid


class Country(str, enum.Enum):
    NEPAL = "nepal"
    INDIA = "india"


class ListingPurpose(str, enum.Enum):
    """Whether the space is offered for rent or for sale."""
    RENT = "rent"
    SALE = "sale"


class SpaceType(str, enum.Enum):
    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"
    SEMI_RESIDENTIAL = "semi-residential"
    MIXED_USE = "mixed-use"


class SpaceCategory(str, enum.Enum):
    """Category tag identifying the listing collection."""
    ROOM = "room"
    APARTMENT = "apartment"
    HOUSE = "house"
    FLAT = "flat"
    LAND = "land"


class GenderPreference(str, enum.Enum):
    GIRLS_ONLY = "girlsOnly"
    FOR_ALL = "forAll"
    BOYS_ONLY = "boysOnly"
    FAMILY_ONLY = "familyOnly"
    FAMILY_AND_GIRLS_ONLY = "familyAndGirlsOnly"
    WORKING_PROFESSIONAL_AND_GIRLS_AND_FAMILY_ONLY = "workingProfessionalAndGirlsAndFamilyOnly"


class FurnishStatus(str, enum.Enum):
    FULL = "full"
    SEMI = "semi"
    PART = "part"
    NONE = "none"


class ListingMixin:
    """Columns common to every listing table."""

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )
    country: Mapped[str] = mapped_column(String(20), nullable=False, default=Country.NEPAL.value)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    chowk: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    space_images_url: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    description_of_space: Mapped[str] = mapped_column(Text, nullable=False)
    fare: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    listing_type: Mapped[str] = mapped_column(
        String(10), nullable=False, default=ListingPurpose.RENT.value, index=True
    )
    space_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SpaceType.RESIDENTIAL.value
    )
    space_categories: Mapped[str] = mapped_column(String(20), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_exclusive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class SharedSpaceMixin(ListingMixin):
    """Rooms, flats and apartments: spaces shared with or rented from a provider."""

    district: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    facility: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    gender_preference: Mapped[str] = mapped_column(
        String(50), nullable=False, default=GenderPreference.FOR_ALL.value, index=True
    )
    is_space_provider_living: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    rules_of_living: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    near_popular_place: Mapped[str] = mapped_column(String(255), nullable=False)


class UnitMixin(SharedSpaceMixin):
    """Self-contained units with bedrooms and a floor: flats and apartments."""

    house_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    no_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    no_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_of_kitchens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_of_parking_spaces: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    furnish: Mapped[str] = mapped_column(String(10), nullable=False, default=FurnishStatus.NONE.value)
    floor: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ParcelMixin(ListingMixin):
    """Houses and land: titled properties on a surveyed plot."""

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    video_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    municipality: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    ward_no: Mapped[int] = mapped_column(Integer, nullable=False)
    total_area: Mapped[str] = mapped_column(String(100), nullable=False)
    dimension: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    road_type: Mapped[str] = mapped_column(String(100), nullable=False)
    property_face: Mapped[str] = mapped_column(String(50), nullable=False)
    road_access: Mapped[str] = mapped_column(String(100), nullable=False)
    plot_number: Mapped[str] = mapped_column(String(100), nullable=False)
    near_by_location: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    is_fare_negotiable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
