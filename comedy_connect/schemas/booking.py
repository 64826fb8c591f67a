from typing import Optional
from pydantic import UUID4, field_validator
from datetime import datetime

from comedy_connect.models.booking import BookingStatus
from comedy_connect.schemas.common import CamelModel
from comedy_connect.utils.dates import as_utc


# Booking: Create (POST /bookings)
# Quantity bounds are enforced by the booking service so the error message is uniform.
class BookingCreate(CamelModel):
    show_id: UUID4
    quantity: int = 1


# Nested show summary for booking responses
class BookingShowSummary(CamelModel):
    id: UUID4
    title: str
    date: datetime
    venue: str
    ticket_price: int
    poster_image_url: Optional[str] = None

    @field_validator("date")
    @classmethod
    def normalise_tz(cls, v):
        return as_utc(v)


# Booking: Full response (POST /bookings, GET /bookings/{id})
class Booking(CamelModel):
    id: UUID4
    show_id: UUID4
    user_id: UUID4
    quantity: int
    total_amount: float
    platform_fee: float
    booking_fee: float
    status: BookingStatus
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    show: Optional[BookingShowSummary] = None


# Booking: Cancel response (PATCH /bookings/{id}/cancel)
class BookingCancelResponse(CamelModel):
    id: UUID4
    status: BookingStatus
    cancelled_at: datetime
