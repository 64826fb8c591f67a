import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from comedy_connect.core.errors import (
    BookingError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from comedy_connect.core.roles import Role
from comedy_connect.db.base import Base
from comedy_connect.models import Booking, BookingStatus, Show, TicketInventory, User
from comedy_connect.schemas.show import ShowUpdate
from comedy_connect.services import booking_service, fees, show_service
from comedy_connect.utils.dates import utcnow

from conftest import actor_for


def _available(db, show_id) -> int:
    db.expire_all()
    return db.get(TicketInventory, show_id).available


def _assert_inventory_consistent(db, show_id):
    db.expire_all()
    show = db.get(Show, show_id)
    sold = sum(
        b.quantity for b in db.query(Booking).filter(Booking.show_id == show_id).all()
        if b.status not in (BookingStatus.CANCELLED, BookingStatus.FAILED)
    )
    assert show.inventory.available == show.total_tickets - sold


@pytest.fixture
def live_show(organizer, make_show):
    return make_show(organizer, is_published=True, total_tickets=20, ticket_price=300)


@pytest.mark.parametrize("quantity", [1, 10])
def test_quantity_bounds_accepted(db, audience, live_show, quantity):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, quantity)

    assert booking.quantity == quantity
    assert booking.status is BookingStatus.CONFIRMED_UNPAID
    assert _available(db, live_show.id) == 20 - quantity


@pytest.mark.parametrize(
    "quantity, message",
    [(0, "at least 1 ticket"), (-2, "at least 1 ticket"), (11, "Maximum 10 tickets")],
)
def test_quantity_bounds_rejected(db, audience, live_show, quantity, message):
    with pytest.raises(ValidationError, match=message):
        booking_service.create_booking(db, actor_for(audience), live_show.id, quantity)
    assert _available(db, live_show.id) == 20
    assert db.query(Booking).count() == 0


def test_repeat_bookings_are_separate_rows(db, audience, live_show):
    actor = actor_for(audience)
    first = booking_service.create_booking(db, actor, live_show.id, 2)
    second = booking_service.create_booking(db, actor, live_show.id, 3)

    assert first.id != second.id
    assert db.query(Booking).filter(Booking.user_id == audience.id).count() == 2
    assert _available(db, live_show.id) == 15
    _assert_inventory_consistent(db, live_show.id)


def test_booking_computes_amounts_and_fees(db, audience, live_show):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, 2)

    assert booking.total_amount == 600.0
    # 8% default platform fee, 300 falls in the 200-400 slab at 8%
    assert booking.platform_fee == pytest.approx(48.0)
    assert booking.booking_fee == pytest.approx(48.0)


def test_not_enough_tickets(db, audience, organizer, make_show):
    show = make_show(organizer, is_published=True, total_tickets=5, available=2)

    with pytest.raises(BookingError, match="Not enough tickets available"):
        booking_service.create_booking(db, actor_for(audience), show.id, 3)

    assert _available(db, show.id) == 2
    assert db.query(Booking).count() == 0


def test_booking_takes_last_tickets_then_sells_out(db, make_user, organizer, make_show):
    show = make_show(organizer, is_published=True, total_tickets=3)
    first, second = make_user(), make_user()

    booking_service.create_booking(db, actor_for(first), show.id, 3)
    with pytest.raises(BookingError):
        booking_service.create_booking(db, actor_for(second), show.id, 1)

    assert _available(db, show.id) == 0
    _assert_inventory_consistent(db, show.id)


def test_cannot_book_past_show(db, audience, organizer, make_show):
    show = make_show(organizer, is_published=True, days_ahead=-1)
    with pytest.raises(BookingError, match="past shows"):
        booking_service.create_booking(db, actor_for(audience), show.id, 1)


def test_draft_is_not_found_for_audience(db, audience, organizer, make_show):
    draft = make_show(organizer)
    with pytest.raises(NotFoundError):
        booking_service.create_booking(db, actor_for(audience), draft.id, 1)


def test_owner_cannot_book_own_draft(db, organizer, make_show):
    draft = make_show(organizer)
    with pytest.raises(BookingError, match="unpublished"):
        booking_service.create_booking(db, actor_for(organizer), draft.id, 1)


def test_guest_cannot_book(db, live_show):
    with pytest.raises(UnauthorizedError):
        booking_service.create_booking(db, None, live_show.id, 1)


def test_inventory_tracks_capacity_edits_and_bookings(db, organizer, audience, live_show):
    owner = actor_for(organizer)
    buyer = actor_for(audience)

    booking_service.create_booking(db, buyer, live_show.id, 4)
    show_service.update_show(db, owner, live_show.id, ShowUpdate(total_tickets=12))
    booking_service.create_booking(db, buyer, live_show.id, 6)

    assert _available(db, live_show.id) == 2
    _assert_inventory_consistent(db, live_show.id)


# ---------------------------------------------------------------------------
# Reads and cancellation
# ---------------------------------------------------------------------------


def test_list_bookings_returns_only_own(db, make_user, live_show):
    mine, theirs = make_user(), make_user()
    booking_service.create_booking(db, actor_for(mine), live_show.id, 1)
    booking_service.create_booking(db, actor_for(theirs), live_show.id, 1)

    bookings = booking_service.list_bookings(db, actor_for(mine))
    assert [b.user_id for b in bookings] == [mine.id]


def test_get_booking_of_someone_else_is_forbidden(db, make_user, live_show):
    owner, stranger = make_user(), make_user()
    booking = booking_service.create_booking(db, actor_for(owner), live_show.id, 1)

    with pytest.raises(ForbiddenError):
        booking_service.get_booking(db, actor_for(stranger), booking.id)


def test_cancel_restores_inventory(db, audience, live_show):
    actor = actor_for(audience)
    booking = booking_service.create_booking(db, actor, live_show.id, 4)

    cancelled = booking_service.cancel_booking(db, actor, booking.id)

    assert cancelled.status is BookingStatus.CANCELLED
    assert cancelled.cancelled_at is not None
    assert _available(db, live_show.id) == 20
    _assert_inventory_consistent(db, live_show.id)


def test_cancel_twice_fails(db, audience, live_show):
    actor = actor_for(audience)
    booking = booking_service.create_booking(db, actor, live_show.id, 1)
    booking_service.cancel_booking(db, actor, booking.id)

    with pytest.raises(ValidationError, match="Only active bookings"):
        booking_service.cancel_booking(db, actor, booking.id)
    assert _available(db, live_show.id) == 20


def test_admin_can_cancel_any_booking(db, audience, admin, live_show):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, 2)
    cancelled = booking_service.cancel_booking(db, actor_for(admin), booking.id)
    assert cancelled.status is BookingStatus.CANCELLED


def test_stranger_cannot_cancel(db, audience, make_user, live_show):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, 2)
    other = make_user(Role.ORGANIZER_VERIFIED)
    with pytest.raises(ForbiddenError):
        booking_service.cancel_booking(db, actor_for(other), booking.id)


def test_list_bookings_pages_in_the_query(db, audience, live_show):
    actor = actor_for(audience)
    for _ in range(3):
        booking_service.create_booking(db, actor, live_show.id, 1)

    assert booking_service.count_bookings(db, actor) == 3
    assert len(booking_service.list_bookings(db, actor, offset=0, limit=2)) == 2
    assert len(booking_service.list_bookings(db, actor, offset=2, limit=2)) == 1
    assert booking_service.count_bookings(db, actor, show_id=live_show.id) == 3


# ---------------------------------------------------------------------------
# Payment outcomes
# ---------------------------------------------------------------------------


def test_confirm_booking_keeps_inventory(db, audience, live_show):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, 3)

    confirmed = booking_service.confirm_booking(db, booking.id)

    assert confirmed.status is BookingStatus.CONFIRMED
    assert _available(db, live_show.id) == 17
    _assert_inventory_consistent(db, live_show.id)


def test_fail_booking_releases_tickets(db, make_user, live_show):
    kept = booking_service.create_booking(db, actor_for(make_user()), live_show.id, 2)
    failed = booking_service.create_booking(db, actor_for(make_user()), live_show.id, 5)

    result = booking_service.fail_booking(db, failed.id)

    assert result.status is BookingStatus.FAILED
    assert _available(db, live_show.id) == 20 - kept.quantity
    _assert_inventory_consistent(db, live_show.id)
    assert show_service.tickets_sold(db, live_show.id) == 2


def test_payment_outcome_only_applies_to_unpaid_bookings(db, audience, live_show):
    booking = booking_service.create_booking(db, actor_for(audience), live_show.id, 1)
    booking_service.confirm_booking(db, booking.id)

    with pytest.raises(ValidationError, match="Only unpaid bookings"):
        booking_service.fail_booking(db, booking.id)
    with pytest.raises(ValidationError, match="Only unpaid bookings"):
        booking_service.confirm_booking(db, booking.id)
    assert _available(db, live_show.id) == 19


# ---------------------------------------------------------------------------
# Atomicity and concurrency
# ---------------------------------------------------------------------------


def test_failure_inside_booking_transaction_rolls_back(db, audience, live_show, monkeypatch):
    def broken_fee(*args, **kwargs):
        raise RuntimeError("fee lookup failed")

    monkeypatch.setattr(fees, "calculate_platform_fee", broken_fee)

    with pytest.raises(RuntimeError):
        booking_service.create_booking(db, actor_for(audience), live_show.id, 4)

    assert _available(db, live_show.id) == 20
    assert db.query(Booking).count() == 0


@pytest.fixture
def file_session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_concurrent_buyers_never_oversell(file_session_factory):
    buyers, last_tickets = 20, 5

    setup = file_session_factory()
    organizer = User(email="host@example.com", role=Role.ORGANIZER_VERIFIED)
    users = [User(email=f"fan{i}@example.com", role=Role.AUDIENCE) for i in range(buyers)]
    setup.add_all([organizer, *users])
    setup.flush()
    show = Show(
        title="Last Call",
        date=utcnow() + timedelta(days=3),
        venue="The Cellar",
        google_maps_link="https://maps.example.com/cellar",
        ticket_price=250,
        total_tickets=last_tickets,
        is_published=True,
        created_by=organizer.id,
    )
    setup.add(show)
    setup.flush()
    setup.add(TicketInventory(show_id=show.id, available=last_tickets))
    setup.commit()
    show_id = show.id
    actors = [actor_for(u) for u in users]
    setup.close()

    start = threading.Barrier(buyers)

    def buy(actor):
        session = file_session_factory()
        try:
            start.wait()
            booking_service.create_booking(session, actor, show_id, 1)
            return "ok"
        except BookingError:
            return "sold out"
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=buyers) as pool:
        outcomes = list(pool.map(buy, actors))

    assert outcomes.count("ok") == last_tickets
    assert outcomes.count("sold out") == buyers - last_tickets

    check = file_session_factory()
    try:
        assert check.get(TicketInventory, show_id).available == 0
        assert check.query(Booking).filter(Booking.show_id == show_id).count() == last_tickets
    finally:
        check.close()
