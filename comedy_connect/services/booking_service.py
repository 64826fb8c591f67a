"""
Booking creation and the ticket inventory counter.

The counter is decremented with a single guarded statement

    UPDATE ticket_inventory SET available = available - :q
    WHERE show_id = :id AND available >= :q

inside the same transaction that inserts the booking row. Either both writes
commit or neither does, and two concurrent requests can never both take the
last tickets: the second UPDATE matches no row once the first has committed.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload, selectinload

from comedy_connect.core.errors import (
    BookingError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from comedy_connect.core.roles import Actor
from comedy_connect.db.session import transaction
from comedy_connect.models.booking import (
    Booking,
    BookingStatus,
    ACTIVE_BOOKING_STATUSES,
    MAX_TICKETS_PER_BOOKING,
)
from comedy_connect.models.show import Show, TicketInventory
from comedy_connect.models.user import User
from comedy_connect.services import fees
from comedy_connect.services.visibility import can_view_show
from comedy_connect.utils.dates import is_future, utcnow

logger = logging.getLogger(__name__)


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be at least 1 ticket")
    if quantity > MAX_TICKETS_PER_BOOKING:
        raise ValidationError(f"Maximum {MAX_TICKETS_PER_BOOKING} tickets per booking")


def _load_booking(db: Session, booking_id: UUID, for_update: bool = False) -> Booking:
    query = db.query(Booking).options(joinedload(Booking.show)).filter(Booking.id == booking_id)
    if for_update:
        query = query.with_for_update(of=Booking)
    booking = query.first()
    if not booking:
        raise NotFoundError("Booking")
    return booking


def create_booking(db: Session, actor: Optional[Actor], show_id: UUID, quantity: int) -> Booking:
    """
    Book `quantity` tickets of a published, upcoming show.

    Repeat bookings by the same user are separate rows; they are never merged.
    """
    if actor is None:
        raise UnauthorizedError()
    _validate_quantity(quantity)

    with transaction(db):
        # Shared lock: publish-state changes wait for in-flight bookings
        show = (
            db.query(Show)
            .options(
                selectinload(Show.creator).selectinload(User.organizer_profile),
                selectinload(Show.creator).selectinload(User.comedian_profile),
            )
            .filter(Show.id == show_id)
            .with_for_update(read=True)
            .first()
        )
        if not show or not can_view_show(show, actor):
            raise NotFoundError("Show")
        if not show.is_published:
            raise BookingError("Cannot book an unpublished show")
        if not is_future(show.date):
            raise BookingError("Cannot book past shows")

        result = db.execute(
            update(TicketInventory)
            .where(
                TicketInventory.show_id == show.id,
                TicketInventory.available >= quantity,
            )
            .values(available=TicketInventory.available - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning(
                "Booking rejected for show %s: %d ticket(s) requested, not enough available",
                show.id, quantity,
            )
            raise BookingError("Not enough tickets available")

        total_amount = float(show.ticket_price * quantity)
        booking = Booking(
            show_id=show.id,
            user_id=actor.user_id,
            quantity=quantity,
            total_amount=total_amount,
            platform_fee=fees.calculate_platform_fee(db, show, total_amount),
            booking_fee=fees.calculate_booking_fee(
                show.ticket_price, total_amount, fees.get_fee_slabs(db)
            ),
            status=BookingStatus.CONFIRMED_UNPAID,
        )
        db.add(booking)
        db.flush()
        booking_id = booking.id

    logger.info(
        "Booking %s created: user %s, show %s, %d ticket(s)",
        booking_id, actor.user_id, show_id, quantity,
    )
    return _load_booking(db, booking_id)


def _own_bookings(db: Session, actor: Optional[Actor], show_id: Optional[UUID]):
    if actor is None:
        raise UnauthorizedError()
    query = db.query(Booking).filter(Booking.user_id == actor.user_id)
    if show_id:
        query = query.filter(Booking.show_id == show_id)
    return query


def count_bookings(db: Session, actor: Optional[Actor], show_id: Optional[UUID] = None) -> int:
    return _own_bookings(db, actor, show_id).count()


def list_bookings(
    db: Session,
    actor: Optional[Actor],
    show_id: Optional[UUID] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[Booking]:
    """The caller's bookings, newest first, optionally for one show."""
    query = (
        _own_bookings(db, actor, show_id)
        .options(joinedload(Booking.show))
        .order_by(Booking.created_at.desc())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()



def get_booking(db: Session, actor: Optional[Actor], booking_id: UUID) -> Booking:
    if actor is None:
        raise UnauthorizedError()
    booking = _load_booking(db, booking_id)
    if booking.user_id != actor.user_id:
        raise ForbiddenError("Unauthorized access to booking")
    return booking


def cancel_booking(db: Session, actor: Optional[Actor], booking_id: UUID) -> Booking:
    """
    Cancel an active booking of an upcoming show and return its tickets to
    the inventory, in one transaction.
    """
    if actor is None:
        raise UnauthorizedError()

    with transaction(db):
        booking = _load_booking(db, booking_id, for_update=True)
        if booking.user_id != actor.user_id and not actor.is_admin:
            raise ForbiddenError("Unauthorized access to booking")
        if booking.status not in ACTIVE_BOOKING_STATUSES:
            raise ValidationError(
                f"Only active bookings can be cancelled (current status: '{booking.status.value}')"
            )
        if not is_future(booking.show.date):
            raise BookingError("Cannot cancel a booking for a past show")

        booking.status = BookingStatus.CANCELLED
        booking.cancelled_at = utcnow()
        db.execute(
            update(TicketInventory)
            .where(TicketInventory.show_id == booking.show_id)
            .values(available=TicketInventory.available + booking.quantity)
            .execution_options(synchronize_session=False)
        )

    logger.info("Booking %s cancelled by %s", booking_id, actor.user_id)
    return _load_booking(db, booking_id)


# ---------------------------------------------------------------------------
# Payment outcomes
# ---------------------------------------------------------------------------

# Bookings still waiting on payment
_AWAITING_PAYMENT = (BookingStatus.PENDING, BookingStatus.CONFIRMED_UNPAID)


def confirm_booking(db: Session, booking_id: UUID) -> Booking:
    """Payment received: the booking becomes CONFIRMED. Inventory is untouched."""
    with transaction(db):
        booking = _load_booking(db, booking_id, for_update=True)
        if booking.status not in _AWAITING_PAYMENT:
            raise ValidationError(
                f"Only unpaid bookings can be confirmed (current status: '{booking.status.value}')"
            )
        booking.status = BookingStatus.CONFIRMED

    logger.info("Booking %s confirmed", booking_id)
    return _load_booking(db, booking_id)


def fail_booking(db: Session, booking_id: UUID) -> Booking:
    """Payment failed: the booking becomes FAILED and its tickets go back on sale."""
    with transaction(db):
        booking = _load_booking(db, booking_id, for_update=True)
        if booking.status not in _AWAITING_PAYMENT:
            raise ValidationError(
                f"Only unpaid bookings can be failed (current status: '{booking.status.value}')"
            )
        booking.status = BookingStatus.FAILED
        db.execute(
            update(TicketInventory)
            .where(TicketInventory.show_id == booking.show_id)
            .values(available=TicketInventory.available + booking.quantity)
            .execution_options(synchronize_session=False)
        )

    logger.info("Booking %s failed, %d ticket(s) released", booking_id, booking.quantity)
    return _load_booking(db, booking_id)
