from typing import Optional, List
from pydantic import UUID4, field_validator
from datetime import datetime

from comedy_connect.schemas.common import CamelModel
from comedy_connect.utils.dates import as_utc


# Show: Create (POST /shows)
class ShowCreate(CamelModel):
    title: str
    description: Optional[str] = None
    date: datetime
    venue: str
    google_maps_link: str
    ticket_price: int
    total_tickets: int
    poster_image_url: Optional[str] = None
    youtube_urls: List[str] = []
    instagram_urls: List[str] = []
    comedian_ids: List[UUID4] = []


# Show: Update (PUT/PATCH /shows/{id}); only fields that were sent are applied
class ShowUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    venue: Optional[str] = None
    google_maps_link: Optional[str] = None
    ticket_price: Optional[int] = None
    total_tickets: Optional[int] = None
    poster_image_url: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    instagram_urls: Optional[List[str]] = None
    comedian_ids: Optional[List[UUID4]] = None


class ComedianSummary(CamelModel):
    id: UUID4
    stage_name: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    instagram_urls: Optional[List[str]] = None


# Booking stats attached in manage mode
class ShowStats(CamelModel):
    tickets_sold: int = 0
    revenue: float = 0.0


class Show(CamelModel):
    id: UUID4
    title: str
    description: Optional[str] = None
    date: datetime
    venue: str
    google_maps_link: str
    ticket_price: int
    total_tickets: int
    poster_image_url: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    instagram_urls: Optional[List[str]] = None
    is_published: bool
    is_disbursed: bool = False
    custom_platform_fee: Optional[float] = None
    created_by: UUID4
    created_at: Optional[datetime] = None
    available_tickets: Optional[int] = None
    booking_count: int = 0
    comedians: List[ComedianSummary] = []
    stats: Optional[ShowStats] = None

    @field_validator("date", "created_at")
    @classmethod
    def normalise_tz(cls, v):
        return as_utc(v)


# Admin: per-show platform fee override (PATCH /admin/shows/{id}/fee)
class ShowFeeUpdate(CamelModel):
    custom_platform_fee: Optional[float] = None
