"""
Creator applications and the public comedian directory.

Submitting an organizer or comedian profile moves an audience member to the
matching unverified tier; an admin approval later promotes them to verified.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from comedy_connect.core.errors import UnauthorizedError, ValidationError
from comedy_connect.core.roles import Actor, Role
from comedy_connect.db.session import transaction
from comedy_connect.models.profile import ApprovalStatus, OrganizerProfile, ComedianProfile
from comedy_connect.models.user import User
from comedy_connect.schemas.user import OrganizerProfileUpsert, ComedianProfileUpsert

logger = logging.getLogger(__name__)


def _load_user(db: Session, actor: Optional[Actor]) -> User:
    if actor is None:
        raise UnauthorizedError()
    user = db.query(User).filter(User.id == actor.user_id).first()
    if not user:
        raise UnauthorizedError()
    return user


def _reopen_application(profile) -> None:
    """A resubmitted application goes back in the approval queue."""
    profile.approval_status = ApprovalStatus.PENDING
    profile.approved_at = None
    profile.approved_by = None


def upsert_organizer_profile(db: Session, actor: Optional[Actor], data: OrganizerProfileUpsert) -> OrganizerProfile:
    user = _load_user(db, actor)
    if user.role.is_comedian:
        raise ValidationError("Comedian accounts cannot apply as organizers")
    if not data.name.strip():
        raise ValidationError("Organizer name is required")

    with transaction(db):
        profile = user.organizer_profile
        if profile is None:
            profile = OrganizerProfile(user_id=user.id, approval_status=ApprovalStatus.PENDING)
            db.add(profile)
        elif not user.role.is_verified_creator:
            _reopen_application(profile)
        profile.name = data.name.strip()
        profile.contact = data.contact
        profile.description = data.description
        if user.role is Role.AUDIENCE:
            user.role = Role.ORGANIZER_UNVERIFIED

    logger.info("Organizer profile saved for user %s", user.id)
    db.refresh(profile)
    return profile


def upsert_comedian_profile(db: Session, actor: Optional[Actor], data: ComedianProfileUpsert) -> ComedianProfile:
    user = _load_user(db, actor)
    if user.role.is_organizer:
        raise ValidationError("Organizer accounts cannot apply as comedians")
    if not data.stage_name.strip():
        raise ValidationError("Stage name is required")

    with transaction(db):
        profile = user.comedian_profile
        if profile is None:
            profile = ComedianProfile(
                user_id=user.id,
                created_by=user.id,
                approval_status=ApprovalStatus.PENDING,
            )
            db.add(profile)
        elif not user.role.is_verified_creator:
            _reopen_application(profile)
        profile.stage_name = data.stage_name.strip()
        profile.bio = data.bio
        profile.profile_image_url = data.profile_image_url
        profile.youtube_urls = list(data.youtube_urls)
        profile.instagram_urls = list(data.instagram_urls)
        if user.role is Role.AUDIENCE:
            user.role = Role.COMEDIAN_UNVERIFIED

    logger.info("Comedian profile saved for user %s", user.id)
    db.refresh(profile)
    return profile


def list_comedians(db: Session) -> List[ComedianProfile]:
    """Approved comedians, alphabetically by stage name."""
    return (
        db.query(ComedianProfile)
        .filter(ComedianProfile.approval_status == ApprovalStatus.APPROVED)
        .order_by(ComedianProfile.stage_name.asc())
        .all()
    )
