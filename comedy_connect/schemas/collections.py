from typing import Optional, List
from pydantic import UUID4, field_validator
from datetime import datetime

from comedy_connect.schemas.common import CamelModel
from comedy_connect.utils.dates import as_utc


class CollectionCreator(CamelModel):
    email: str
    organizer_name: Optional[str] = None
    comedian_stage_name: Optional[str] = None


# Money for one show, from its sold (confirmed, paid or unpaid) bookings
class CollectionStats(CamelModel):
    tickets_sold: int = 0
    show_revenue: float = 0.0
    booking_fee: float = 0.0
    platform_fee: float = 0.0
    platform_revenue: float = 0.0   # show revenue + booking fees collected
    platform_earnings: float = 0.0  # platform fee + booking fees
    show_earnings: float = 0.0      # owed to the creator: revenue - platform fee


class ShowCollection(CamelModel):
    id: UUID4
    title: str
    date: datetime
    venue: str
    is_published: bool
    is_disbursed: bool
    creator: CollectionCreator
    stats: CollectionStats

    @field_validator("date")
    @classmethod
    def normalise_tz(cls, v):
        return as_utc(v)


class CollectionGroup(CamelModel):
    show_revenue: float = 0.0
    booking_fee: float = 0.0
    platform_fee: float = 0.0
    platform_revenue: float = 0.0
    platform_earnings: float = 0.0
    show_earnings: float = 0.0
    shows: List[ShowCollection] = []


# Admin: GET /admin/collections
class CollectionsSummary(CamelModel):
    lifetime: CollectionGroup
    active: CollectionGroup       # published, upcoming
    pending: CollectionGroup      # past and not yet disbursed
    booked: CollectionGroup       # disbursed
    unpublished: CollectionGroup
