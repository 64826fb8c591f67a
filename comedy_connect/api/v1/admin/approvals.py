from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_admin_actor
from comedy_connect.core.roles import Actor
from comedy_connect.models.user import User
from comedy_connect.schemas.user import (
    User as UserSchema,
    OrganizerProfile as OrganizerProfileSchema,
    ComedianProfile as ComedianProfileSchema,
    PendingCreator,
    ApprovalDecision,
)
from comedy_connect.services import admin_service

router = APIRouter(prefix="/admin/approvals", tags=["Admin - Approvals"])


def _serialize_pending(user: User) -> PendingCreator:
    return PendingCreator(
        user=UserSchema.model_validate(user),
        organizer_profile=OrganizerProfileSchema.model_validate(user.organizer_profile)
        if user.organizer_profile else None,
        comedian_profile=ComedianProfileSchema.model_validate(user.comedian_profile)
        if user.comedian_profile else None,
    )


@router.get("/", response_model=List[PendingCreator])
def list_pending(
    db: Session = Depends(get_db),
    admin: Actor = Depends(get_admin_actor),
):
    """Organizers and comedians waiting for verification, oldest first."""
    return [_serialize_pending(u) for u in admin_service.list_pending_creators(db)]


@router.post("/{user_id}/approve", response_model=PendingCreator)
def approve(
    user_id: UUID,
    data: Optional[ApprovalDecision] = Body(None),
    db: Session = Depends(get_db),
    admin: Actor = Depends(get_admin_actor),
):
    user = admin_service.approve_creator(db, admin, user_id, data.note if data else None)
    return _serialize_pending(user)


@router.post("/{user_id}/reject", response_model=PendingCreator)
def reject(
    user_id: UUID,
    data: Optional[ApprovalDecision] = Body(None),
    db: Session = Depends(get_db),
    admin: Actor = Depends(get_admin_actor),
):
    user = admin_service.reject_creator(db, admin, user_id, data.note if data else None)
    return _serialize_pending(user)
