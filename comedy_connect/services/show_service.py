"""
Show lifecycle: create, list, fetch, edit, publish, unpublish, delete.

A show starts as a draft owned by its creator. Once it is published *and* has
bookings, the fields buyers paid for are frozen: the price cannot change, the
capacity cannot grow and credited comedians cannot be dropped. Independently of
publish state, capacity can never fall below the tickets already sold.

Every mutation runs inside ``transaction(db)`` so the show row, its inventory
row and its comedian links are written all-or-nothing.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from comedy_connect.core.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from comedy_connect.core.roles import Actor
from comedy_connect.db.session import transaction
from comedy_connect.models.booking import Booking, ACTIVE_BOOKING_STATUSES, SOLD_BOOKING_STATUSES
from comedy_connect.models.profile import ComedianProfile
from comedy_connect.models.show import Show, TicketInventory, ShowComedian
from comedy_connect.schemas.show import ShowCreate, ShowUpdate
from comedy_connect.services.visibility import ShowListMode, build_visibility_filter, can_view_show
from comedy_connect.utils.dates import as_utc, is_future

logger = logging.getLogger(__name__)

CAPACITY_BELOW_SOLD_MESSAGE = "Cannot reduce capacity below sold tickets"

# Fields any owner/admin may always edit
_ALWAYS_EDITABLE = (
    "title",
    "description",
    "venue",
    "google_maps_link",
    "poster_image_url",
    "youtube_urls",
    "instagram_urls",
)


@dataclass
class ShowStats:
    """Booking aggregates for one show."""

    booking_count: int = 0  # active booking rows
    tickets_sold: int = 0  # summed quantity of active bookings
    revenue: float = 0.0  # summed total of confirmed (paid or unpaid) bookings


@dataclass
class ShowListing:
    show: Show
    stats: ShowStats = field(default_factory=ShowStats)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_actor(actor: Optional[Actor]) -> Actor:
    if actor is None:
        raise UnauthorizedError()
    return actor


def _load_show(db: Session, show_id: UUID, for_update: bool = False) -> Show:
    query = (
        db.query(Show)
        .options(
            selectinload(Show.inventory),
            selectinload(Show.show_comedians).selectinload(ShowComedian.comedian),
        )
        .filter(Show.id == show_id)
    )
    if for_update:
        query = query.with_for_update()
    show = query.first()
    if not show:
        raise NotFoundError("Show")
    return show


def _lock_inventory(db: Session, show_id: UUID) -> TicketInventory:
    """Row-lock the inventory counter; bookings decrement it under the same lock."""
    return (
        db.query(TicketInventory)
        .filter(TicketInventory.show_id == show_id)
        .with_for_update()
        .one()
    )


def count_active_bookings(db: Session, show_id: UUID) -> int:
    """Number of booking rows still holding tickets. Used for "has bookings" gating."""
    return (
        db.query(func.count(Booking.id))
        .filter(Booking.show_id == show_id, Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .scalar()
    )


def tickets_sold(db: Session, show_id: UUID) -> int:
    """Summed quantity of active bookings. Used for capacity checks."""
    return (
        db.query(func.coalesce(func.sum(Booking.quantity), 0))
        .filter(Booking.show_id == show_id, Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .scalar()
    )


def get_show_stats(db: Session, show_ids: Iterable[UUID]) -> Dict[UUID, ShowStats]:
    """Aggregate booking stats for many shows in one query per measure."""
    show_ids = list(show_ids)
    stats = {show_id: ShowStats() for show_id in show_ids}
    if not show_ids:
        return stats

    active_rows = (
        db.query(Booking.show_id, func.count(Booking.id), func.coalesce(func.sum(Booking.quantity), 0))
        .filter(Booking.show_id.in_(show_ids), Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .group_by(Booking.show_id)
        .all()
    )
    for show_id, count, sold in active_rows:
        stats[show_id].booking_count = count
        stats[show_id].tickets_sold = sold

    revenue_rows = (
        db.query(Booking.show_id, func.coalesce(func.sum(Booking.total_amount), 0))
        .filter(Booking.show_id.in_(show_ids), Booking.status.in_(SOLD_BOOKING_STATUSES))
        .group_by(Booking.show_id)
        .all()
    )
    for show_id, revenue in revenue_rows:
        stats[show_id].revenue = float(revenue)

    return stats


def _validate_price(ticket_price: int) -> None:
    if isinstance(ticket_price, bool) or not isinstance(ticket_price, int) or ticket_price <= 0:
        raise ValidationError("Ticket price must be a positive integer")


def _validate_capacity(total_tickets: int) -> None:
    if total_tickets <= 0:
        raise ValidationError("Total tickets must be greater than 0")


def _validate_future(date: datetime) -> None:
    if not is_future(date):
        raise ValidationError("Show date must be in the future")


def _resolve_comedians(db: Session, comedian_ids: List[UUID]) -> List[UUID]:
    """De-duplicate `comedian_ids` keeping billing order; every id must exist."""
    ordered = list(dict.fromkeys(comedian_ids))
    if not ordered:
        return ordered
    found = {
        row.id
        for row in db.query(ComedianProfile.id).filter(ComedianProfile.id.in_(ordered)).all()
    }
    missing = [str(cid) for cid in ordered if cid not in found]
    if missing:
        raise ValidationError(f"Unknown comedian id(s): {', '.join(missing)}")
    return ordered


def _link_comedians(db: Session, show: Show, comedian_ids: List[UUID]) -> None:
    for index, comedian_id in enumerate(comedian_ids):
        db.add(ShowComedian(show_id=show.id, comedian_id=comedian_id, order=index))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _listing_query(db: Session, actor: Optional[Actor], mode: Optional[ShowListMode]):
    return db.query(Show).filter(build_visibility_filter(actor, mode))


def count_shows(db: Session, actor: Optional[Actor], mode: Optional[ShowListMode] = None) -> int:
    return _listing_query(db, actor, mode).count()


def list_shows(
    db: Session,
    actor: Optional[Actor],
    mode: Optional[ShowListMode] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[ShowListing]:
    """Shows visible to `actor` in `mode`, soonest first, with booking stats."""
    query = (
        _listing_query(db, actor, mode)
        .options(
            selectinload(Show.inventory),
            selectinload(Show.show_comedians).selectinload(ShowComedian.comedian),
        )
        .order_by(Show.date.asc())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)
    shows = query.all()

    stats = get_show_stats(db, [show.id for show in shows])
    return [ShowListing(show=show, stats=stats[show.id]) for show in shows]


def get_show(db: Session, show_id: UUID, actor: Optional[Actor] = None) -> Show:
    """
    Fetch one show.

    Drafts are reported as not found to anyone but their creator and admins,
    so their existence is not leaked.
    """
    show = _load_show(db, show_id)
    if not can_view_show(show, actor):
        raise NotFoundError("Show")
    return show


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def create_show(db: Session, actor: Optional[Actor], data: ShowCreate) -> Show:
    actor = _require_actor(actor)
    if not actor.role.can_publish:
        raise ForbiddenError(
            "Account not verified. Please wait for admin approval before creating shows."
        )

    if not (data.title or "").strip() or not (data.venue or "").strip() or not (data.google_maps_link or "").strip():
        raise ValidationError(
            "Title, date, venue, location link, ticket price, and total tickets are required"
        )
    _validate_future(data.date)
    _validate_capacity(data.total_tickets)
    _validate_price(data.ticket_price)

    with transaction(db):
        comedian_ids = _resolve_comedians(db, data.comedian_ids)

        # A comedian creating a show is credited on it, top of the bill
        if actor.role.is_comedian:
            own_profile = (
                db.query(ComedianProfile)
                .filter(ComedianProfile.user_id == actor.user_id)
                .first()
            )
            if own_profile and own_profile.id not in comedian_ids:
                comedian_ids = [own_profile.id, *comedian_ids]

        show = Show(
            title=data.title.strip(),
            description=data.description,
            date=as_utc(data.date),
            venue=data.venue.strip(),
            google_maps_link=data.google_maps_link.strip(),
            ticket_price=data.ticket_price,
            total_tickets=data.total_tickets,
            poster_image_url=data.poster_image_url,
            youtube_urls=list(data.youtube_urls),
            instagram_urls=list(data.instagram_urls),
            is_published=False,
            created_by=actor.user_id,
        )
        db.add(show)
        db.flush()

        db.add(TicketInventory(show_id=show.id, available=data.total_tickets))
        _link_comedians(db, show, comedian_ids)

    logger.info("Show %s created by %s (%d tickets)", show.id, actor.user_id, show.total_tickets)
    return _load_show(db, show.id)


def update_show(db: Session, actor: Optional[Actor], show_id: UUID, patch: ShowUpdate) -> Show:
    """
    Apply `patch` to a show.

    Sold tickets are read inside the same transaction that writes the new
    capacity, with the show row locked, so two concurrent capacity cuts cannot
    both slip under the sold count.
    """
    actor = _require_actor(actor)
    changes = patch.model_dump(exclude_unset=True)

    with transaction(db):
        show = _load_show(db, show_id, for_update=True)
        if not actor.can_manage(show.created_by):
            raise ForbiddenError("Permission denied")
        inventory = _lock_inventory(db, show.id)

        has_bookings = count_active_bookings(db, show.id) > 0
        locked = show.is_published and has_bookings

        new_price = changes.get("ticket_price")
        new_total = changes.get("total_tickets")
        new_comedians = changes.get("comedian_ids")

        if locked:
            if new_price is not None and new_price != show.ticket_price:
                raise ValidationError("Cannot change ticket price for a published show with bookings")
            if new_total is not None and new_total > show.total_tickets:
                raise ValidationError("Cannot increase capacity for a published show with bookings")
            if new_comedians is not None:
                current = {link.comedian_id for link in show.show_comedians}
                if current - set(new_comedians):
                    raise ValidationError("Cannot remove comedians from a published show with bookings")

        sold = 0
        if new_total is not None:
            _validate_capacity(new_total)
            sold = tickets_sold(db, show.id)
            if new_total < sold:
                raise ValidationError(
                    f"{CAPACITY_BELOW_SOLD_MESSAGE} ({sold} sold, {new_total} requested)"
                )
        if new_price is not None:
            _validate_price(new_price)

        for name in _ALWAYS_EDITABLE:
            if name not in changes:
                continue
            value = changes[name]
            # Required columns are never blanked
            if name in ("title", "venue", "google_maps_link") and not (value or "").strip():
                continue
            setattr(show, name, value)

        if not locked:
            if changes.get("date") is not None:
                _validate_future(changes["date"])
                show.date = as_utc(changes["date"])
            if new_price is not None:
                show.ticket_price = new_price

        # Capacity: increases were rejected above when locked, decreases are always allowed
        if new_total is not None and new_total != show.total_tickets:
            show.total_tickets = new_total
            inventory.available = new_total - sold

        if new_comedians is not None:
            comedian_ids = _resolve_comedians(db, new_comedians)
            show.show_comedians.clear()
            db.flush()
            _link_comedians(db, show, comedian_ids)

    logger.info("Show %s updated by %s: %s", show_id, actor.user_id, sorted(changes))
    return _load_show(db, show_id)


def delete_show(db: Session, actor: Optional[Actor], show_id: UUID) -> None:
    actor = _require_actor(actor)

    with transaction(db):
        show = _load_show(db, show_id, for_update=True)
        if not actor.can_manage(show.created_by):
            raise ForbiddenError("Permission denied")
        _lock_inventory(db, show.id)

        booking_count = count_active_bookings(db, show.id)
        if booking_count > 0:
            raise ValidationError(f"Cannot delete show with {booking_count} existing booking(s)")

        # Inventory, comedian links and released (cancelled/failed) bookings cascade
        db.delete(show)

    logger.info("Show %s deleted by %s", show_id, actor.user_id)


def publish_show(db: Session, actor: Optional[Actor], show_id: UUID) -> Show:
    actor = _require_actor(actor)

    with transaction(db):
        show = _load_show(db, show_id, for_update=True)
        if not actor.can_manage(show.created_by):
            raise ForbiddenError("You don't have permission to publish this show")
        if not actor.role.can_publish:
            raise ForbiddenError("Your account must be verified before you can publish shows")

        if show.is_published:
            raise ValidationError("Show is already published")
        if not is_future(show.date):
            raise ValidationError("Show date must be in the future")
        if show.total_tickets <= 0:
            raise ValidationError("Show must have at least 1 ticket")

        show.is_published = True

    logger.info("Show %s published by %s", show_id, actor.user_id)
    return _load_show(db, show_id)


def unpublish_show(db: Session, actor: Optional[Actor], show_id: UUID) -> Show:
    actor = _require_actor(actor)

    with transaction(db):
        show = _load_show(db, show_id, for_update=True)
        if not actor.can_manage(show.created_by):
            raise ForbiddenError("You don't have permission to unpublish this show")

        if not show.is_published:
            raise ValidationError("Show is already unpublished")
        _lock_inventory(db, show.id)
        if count_active_bookings(db, show.id) > 0:
            raise ValidationError(
                "Cannot unpublish a show that has active bookings. Please cancel the show instead."
            )

        show.is_published = False

    logger.info("Show %s unpublished by %s", show_id, actor.user_id)
    return _load_show(db, show_id)
