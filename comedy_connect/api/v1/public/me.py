from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_actor, get_current_user
from comedy_connect.core.roles import Actor
from comedy_connect.models.user import User
from comedy_connect.schemas.user import (
    User as UserSchema,
    OrganizerProfile as OrganizerProfileSchema,
    OrganizerProfileUpsert,
    ComedianProfile as ComedianProfileSchema,
    ComedianProfileUpsert,
)
from comedy_connect.services import profile_service

router = APIRouter(prefix="/me", tags=["Me"])
organizer_router = APIRouter(prefix="/organizer", tags=["Creators"])
comedian_router = APIRouter(prefix="/comedian", tags=["Creators"])


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/", response_model=UserSchema)
def get_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's account, including their current role."""
    return current_user


# ---------------------------------------------------------------------------
# Creator applications
# ---------------------------------------------------------------------------


@organizer_router.put("/profile", response_model=OrganizerProfileSchema)
def upsert_organizer_profile(
    data: OrganizerProfileUpsert,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Create or edit the caller's organizer profile. New applicants await admin approval."""
    return profile_service.upsert_organizer_profile(db, actor, data)


@comedian_router.put("/profile", response_model=ComedianProfileSchema)
def upsert_comedian_profile(
    data: ComedianProfileUpsert,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    return profile_service.upsert_comedian_profile(db, actor, data)
