from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_current_admin_user
from comedy_connect.models.user import User
from comedy_connect.schemas.fees import (
    PlatformConfig as PlatformConfigSchema,
    PlatformConfigUpdate,
    CreatorFeeUpdate,
)
from comedy_connect.schemas.user import (
    OrganizerProfile as OrganizerProfileSchema,
    ComedianProfile as ComedianProfileSchema,
)
from comedy_connect.services import admin_service, fees

router = APIRouter(prefix="/admin/fees", tags=["Admin - Fees"])
organizer_router = APIRouter(prefix="/admin/organizers", tags=["Admin - Fees"])
comedian_router = APIRouter(prefix="/admin/comedians", tags=["Admin - Fees"])


# ---------------------------------------------------------------------------
# Platform-wide fee configuration
# ---------------------------------------------------------------------------


@router.get("/", response_model=PlatformConfigSchema)
def get_fees(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return fees.get_platform_config(db)


@router.put("/", response_model=PlatformConfigSchema)
def update_fees(
    data: PlatformConfigUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Update the default platform fee percent and/or the booking-fee slabs."""
    return fees.update_platform_config(
        db,
        platform_fee_percent=data.platform_fee_percent,
        fee_slabs=data.fee_slabs,
    )


# ---------------------------------------------------------------------------
# Per-creator overrides; null clears the override
# ---------------------------------------------------------------------------


@organizer_router.patch("/{profile_id}/fee", response_model=OrganizerProfileSchema)
def set_organizer_fee(
    profile_id: UUID,
    data: CreatorFeeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return admin_service.set_organizer_platform_fee(db, profile_id, data.custom_platform_fee)


@comedian_router.patch("/{profile_id}/fee", response_model=ComedianProfileSchema)
def set_comedian_fee(
    profile_id: UUID,
    data: CreatorFeeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return admin_service.set_comedian_platform_fee(db, profile_id, data.custom_platform_fee)
