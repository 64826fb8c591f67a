"""
Admin operations: fee overrides, collections, disbursement, and creator approvals.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from comedy_connect.core.errors import NotFoundError, ValidationError
from comedy_connect.core.roles import Actor, Role
from comedy_connect.db.session import transaction
from comedy_connect.models.booking import Booking, SOLD_BOOKING_STATUSES
from comedy_connect.models.profile import ApprovalStatus, OrganizerProfile, ComedianProfile
from comedy_connect.models.show import Show
from comedy_connect.models.user import User
from comedy_connect.schemas.collections import (
    CollectionCreator,
    CollectionGroup,
    CollectionStats,
    CollectionsSummary,
    ShowCollection,
)
from comedy_connect.services.fees import validate_fee_percent
from comedy_connect.utils.dates import is_future, utcnow

logger = logging.getLogger(__name__)

PENDING_ROLES = (Role.ORGANIZER_UNVERIFIED, Role.COMEDIAN_UNVERIFIED)


def _get_show(db: Session, show_id: UUID, for_update: bool = False) -> Show:
    query = db.query(Show).filter(Show.id == show_id)
    if for_update:
        query = query.with_for_update()
    show = query.first()
    if not show:
        raise NotFoundError("Show")
    return show


# ---------------------------------------------------------------------------
# Fees & disbursement
# ---------------------------------------------------------------------------


def set_show_platform_fee(db: Session, show_id: UUID, percent: Optional[float]) -> Show:
    """Override (or clear, with None) the platform fee for one show."""
    validate_fee_percent(percent)
    with transaction(db):
        show = _get_show(db, show_id, for_update=True)
        if show.is_disbursed:
            raise ValidationError("Cannot change fees for a disbursed show")
        show.custom_platform_fee = percent

    logger.info("Show %s platform fee set to %s", show_id, percent)
    db.refresh(show)
    return show


def set_organizer_platform_fee(db: Session, profile_id: UUID, percent: Optional[float]) -> OrganizerProfile:
    validate_fee_percent(percent)
    with transaction(db):
        profile = db.query(OrganizerProfile).filter(OrganizerProfile.id == profile_id).first()
        if not profile:
            raise NotFoundError("Organizer")
        profile.custom_platform_fee = percent

    logger.info("Organizer %s platform fee set to %s", profile_id, percent)
    db.refresh(profile)
    return profile


def set_comedian_platform_fee(db: Session, profile_id: UUID, percent: Optional[float]) -> ComedianProfile:
    validate_fee_percent(percent)
    with transaction(db):
        profile = db.query(ComedianProfile).filter(ComedianProfile.id == profile_id).first()
        if not profile:
            raise NotFoundError("Comedian")
        profile.custom_platform_fee = percent

    logger.info("Comedian %s platform fee set to %s", profile_id, percent)
    db.refresh(profile)
    return profile


def disburse_show(db: Session, show_id: UUID) -> Show:
    """Mark a past show's revenue as paid out to its creator. Freezes fee edits."""
    with transaction(db):
        show = _get_show(db, show_id, for_update=True)
        if show.is_disbursed:
            raise ValidationError("Show is already disbursed")
        if is_future(show.date):
            raise ValidationError("Cannot disburse a show that has not happened yet")
        show.is_disbursed = True

    logger.info("Show %s disbursed", show_id)
    db.refresh(show)
    return show


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def _show_collection(show: Show, row) -> ShowCollection:
    revenue = float(row.revenue) if row else 0.0
    booking_fee = float(row.booking_fee) if row else 0.0
    platform_fee = float(row.platform_fee) if row else 0.0
    creator = show.creator
    return ShowCollection(
        id=show.id,
        title=show.title,
        date=show.date,
        venue=show.venue,
        is_published=show.is_published,
        is_disbursed=show.is_disbursed,
        creator=CollectionCreator(
            email=creator.email,
            organizer_name=creator.organizer_profile.name if creator.organizer_profile else None,
            comedian_stage_name=creator.comedian_profile.stage_name if creator.comedian_profile else None,
        ),
        stats=CollectionStats(
            tickets_sold=int(row.tickets) if row else 0,
            show_revenue=revenue,
            booking_fee=booking_fee,
            platform_fee=platform_fee,
            platform_revenue=revenue + booking_fee,
            platform_earnings=platform_fee + booking_fee,
            show_earnings=revenue - platform_fee,
        ),
    )


def _group(shows: List[ShowCollection]) -> CollectionGroup:
    return CollectionGroup(
        show_revenue=sum(s.stats.show_revenue for s in shows),
        booking_fee=sum(s.stats.booking_fee for s in shows),
        platform_fee=sum(s.stats.platform_fee for s in shows),
        platform_revenue=sum(s.stats.platform_revenue for s in shows),
        platform_earnings=sum(s.stats.platform_earnings for s in shows),
        show_earnings=sum(s.stats.show_earnings for s in shows),
        shows=shows,
    )


def collections_summary(db: Session, show_id: Optional[UUID] = None) -> CollectionsSummary:
    """
    Money collected per show, grouped the way payouts are worked through:
    lifetime, active (published, upcoming), pending (past, not disbursed),
    booked (disbursed) and unpublished. Past shows are included, so this is
    where admins find shows waiting for disbursement.
    """
    query = (
        db.query(Show)
        .options(
            selectinload(Show.creator).selectinload(User.organizer_profile),
            selectinload(Show.creator).selectinload(User.comedian_profile),
        )
    )
    if show_id:
        query = query.filter(Show.id == show_id)
    shows = query.order_by(Show.date.desc()).all()
    if show_id and not shows:
        raise NotFoundError("Show")

    filters = [Booking.status.in_(SOLD_BOOKING_STATUSES)]
    if show_id:
        filters.append(Booking.show_id == show_id)
    rows = (
        db.query(
            Booking.show_id,
            func.coalesce(func.sum(Booking.quantity), 0).label("tickets"),
            func.coalesce(func.sum(Booking.total_amount), 0).label("revenue"),
            func.coalesce(func.sum(Booking.booking_fee), 0).label("booking_fee"),
            func.coalesce(func.sum(Booking.platform_fee), 0).label("platform_fee"),
        )
        .filter(*filters)
        .group_by(Booking.show_id)
        .all()
    )
    by_show = {r.show_id: r for r in rows}

    now = utcnow()
    items = [_show_collection(show, by_show.get(show.id)) for show in shows]
    return CollectionsSummary(
        lifetime=_group(items),
        active=_group([s for s in items if s.is_published and s.date >= now]),
        pending=_group([s for s in items if not s.is_disbursed and s.date < now]),
        booked=_group([s for s in items if s.is_disbursed]),
        unpublished=_group([s for s in items if not s.is_published]),
    )


# ---------------------------------------------------------------------------
# Creator approvals
# ---------------------------------------------------------------------------


def list_pending_creators(db: Session) -> List[User]:
    return (
        db.query(User)
        .options(selectinload(User.organizer_profile), selectinload(User.comedian_profile))
        .filter(
            User.role.in_(PENDING_ROLES),
            # Rejected applicants stay out until they resubmit
            or_(
                User.organizer_profile.has(OrganizerProfile.approval_status == ApprovalStatus.PENDING),
                User.comedian_profile.has(ComedianProfile.approval_status == ApprovalStatus.PENDING),
            ),
        )
        .order_by(User.created_at.asc())
        .all()
    )


def _creator_profile(user: User):
    if user.role.is_organizer:
        profile = user.organizer_profile
    elif user.role.is_comedian:
        profile = user.comedian_profile
    else:
        raise ValidationError("User is not an organizer or comedian")
    if profile is None:
        raise ValidationError("User has not submitted a creator profile")
    return profile


def _decide(db: Session, admin: Actor, user_id: UUID, status: ApprovalStatus, note: Optional[str]) -> User:
    with transaction(db):
        user = db.query(User).filter(User.id == user_id).with_for_update().first()
        if not user:
            raise NotFoundError("User")
        profile = _creator_profile(user)

        profile.approval_status = status
        profile.approved_at = utcnow()
        profile.approved_by = admin.user_id
        profile.admin_note = note
        user.role = user.role.verified() if status is ApprovalStatus.APPROVED else user.role.unverified()

    logger.info("Creator %s %s by admin %s", user_id, status.value.lower(), admin.user_id)
    db.refresh(user)
    return user


def approve_creator(db: Session, admin: Actor, user_id: UUID, note: Optional[str] = None) -> User:
    return _decide(db, admin, user_id, ApprovalStatus.APPROVED, note)


def reject_creator(db: Session, admin: Actor, user_id: UUID, note: Optional[str] = None) -> User:
    return _decide(db, admin, user_id, ApprovalStatus.REJECTED, note)
