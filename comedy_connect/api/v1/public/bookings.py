from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_actor
from comedy_connect.core.roles import Actor
from comedy_connect.schemas.booking import (
    BookingCreate,
    Booking as BookingSchema,
    BookingCancelResponse,
)
from comedy_connect.schemas.common import PaginatedResponse
from comedy_connect.services import booking_service

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /bookings: book tickets
# ---------------------------------------------------------------------------


@router.post("/", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """
    Book tickets for a published, upcoming show.
    - Quantity must be between 1 and 10.
    - Fails with 400 when the show does not have enough tickets left.
    """
    booking = booking_service.create_booking(db, actor, data.show_id, data.quantity)
    return BookingSchema.model_validate(booking)


# ---------------------------------------------------------------------------
# GET /bookings: list current user's bookings
# ---------------------------------------------------------------------------


@router.get("/", response_model=PaginatedResponse[BookingSchema])
def list_my_bookings(
    show_id: Optional[UUID] = Query(None, alias="showId"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Return the authenticated user's bookings, newest first."""
    total = booking_service.count_bookings(db, actor, show_id)
    bookings = booking_service.list_bookings(
        db, actor, show_id, offset=(page - 1) * limit, limit=limit
    )

    return PaginatedResponse(
        data=[BookingSchema.model_validate(b) for b in bookings],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


# ---------------------------------------------------------------------------
# GET /bookings/{id}: single booking detail
# ---------------------------------------------------------------------------


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Return a single booking. Only the owning user can access it."""
    return BookingSchema.model_validate(booking_service.get_booking(db, actor, booking_id))


# ---------------------------------------------------------------------------
# PATCH /bookings/{id}/cancel
# ---------------------------------------------------------------------------


@router.patch("/{booking_id}/cancel", response_model=BookingCancelResponse)
def cancel_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Cancel an active booking and release its tickets back to the show."""
    booking = booking_service.cancel_booking(db, actor, booking_id)
    return BookingCancelResponse.model_validate(booking)
