from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_admin_actor
from comedy_connect.core.roles import Actor
from comedy_connect.api.v1.public.shows import serialize_show
from comedy_connect.schemas.show import Show as ShowSchema, ShowFeeUpdate
from comedy_connect.services import admin_service, show_service

router = APIRouter(prefix="/admin/shows", tags=["Admin - Shows"])


def _reload(db: Session, show_id: UUID, admin: Actor) -> ShowSchema:
    show = show_service.get_show(db, show_id, admin)
    stats = show_service.get_show_stats(db, [show.id])[show.id]
    return serialize_show(show, stats, include_stats=True)


@router.patch("/{show_id}/fee", response_model=ShowSchema)
def set_show_fee(
    show_id: UUID,
    data: ShowFeeUpdate,
    db: Session = Depends(get_db),
    admin: Actor = Depends(get_admin_actor),
):
    """Override the platform fee for one show. Rejected once the show is disbursed."""
    admin_service.set_show_platform_fee(db, show_id, data.custom_platform_fee)
    return _reload(db, show_id, admin)


@router.post("/{show_id}/disburse", response_model=ShowSchema)
def disburse_show(
    show_id: UUID,
    db: Session = Depends(get_db),
    admin: Actor = Depends(get_admin_actor),
):
    """Mark a past show's payout as settled. This is a one-way switch."""
    admin_service.disburse_show(db, show_id)
    return _reload(db, show_id, admin)
