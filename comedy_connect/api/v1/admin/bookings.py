from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_current_admin_user
from comedy_connect.models.user import User
from comedy_connect.schemas.booking import Booking as BookingSchema
from comedy_connect.services import booking_service

router = APIRouter(prefix="/admin/bookings", tags=["Admin - Bookings"])


# ---------------------------------------------------------------------------
# Payment outcomes, reported by the payment provider integration
# ---------------------------------------------------------------------------


@router.post("/{booking_id}/confirm", response_model=BookingSchema)
def confirm_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return BookingSchema.model_validate(booking_service.confirm_booking(db, booking_id))


@router.post("/{booking_id}/fail", response_model=BookingSchema)
def fail_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Mark an unpaid booking as failed and release its tickets."""
    return BookingSchema.model_validate(booking_service.fail_booking(db, booking_id))
