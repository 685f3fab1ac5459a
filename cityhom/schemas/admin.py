"""
Schemas for the admin dashboard.
"""

from typing import List
from datetime import datetime

from cityhom.schemas.base import CamelModel
from cityhom.schemas.search import SpaceSummary
from cityhom.schemas.user import UserResponse


class EntityStats(CamelModel):
    """Totals for one entity over the requested window."""

    total: int
    new: int
    growth: str


class DashboardStats(CamelModel):
    users: EntityStats
    rooms: EntityStats
    flats: EntityStats
    houses: EntityStats
    lands: EntityStats


class LatestEntries(CamelModel):
    users: List[UserResponse]
    rooms: List[SpaceSummary]
    flats: List[SpaceSummary]
    houses: List[SpaceSummary]
    lands: List[SpaceSummary]


class DashboardResponse(CamelModel):
    """Aggregated dashboard payload."""

    days: int
    since: datetime
    stats: DashboardStats
    latest: LatestEntries
