from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_current_admin_user
from comedy_connect.models.user import User
from comedy_connect.schemas.collections import CollectionsSummary
from comedy_connect.services import admin_service

router = APIRouter(prefix="/admin/collections", tags=["Admin - Collections"])


@router.get("/", response_model=CollectionsSummary)
def get_collections(
    show_id: Optional[UUID] = Query(None, alias="showId", description="Drill down into one show"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Collections dashboard for payouts.

    **Groups:**
    - `lifetime`: every show
    - `active`: published, upcoming
    - `pending`: past and not yet disbursed
    - `booked`: disbursed
    - `unpublished`: drafts

    Money is summed over confirmed bookings (paid or unpaid); cancelled and
    failed bookings are left out.
    """
    return admin_service.collections_summary(db, show_id)
