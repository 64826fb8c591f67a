from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.api.deps import get_actor, get_optional_actor
from comedy_connect.core.roles import Actor
from comedy_connect.models.show import Show
from comedy_connect.schemas.show import (
    ShowCreate,
    ShowUpdate,
    Show as ShowSchema,
    ShowStats as ShowStatsSchema,
    ComedianSummary,
)
from comedy_connect.schemas.common import PaginatedResponse, MessageResponse
from comedy_connect.services import show_service
from comedy_connect.services.show_service import ShowStats
from comedy_connect.services.visibility import ShowListMode

router = APIRouter(prefix="/shows", tags=["Shows"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def serialize_show(show: Show, stats: Optional[ShowStats] = None, include_stats: bool = False) -> ShowSchema:
    """Convert a Show ORM object (inventory and comedians loaded) to its schema."""
    stats = stats or ShowStats()
    return ShowSchema.model_validate(show).model_copy(update={
        "available_tickets": show.inventory.available if show.inventory else None,
        "booking_count": stats.booking_count,
        "comedians": [
            ComedianSummary.model_validate(link.comedian)
            for link in show.show_comedians
            if link.comedian is not None
        ],
        "stats": ShowStatsSchema(tickets_sold=stats.tickets_sold, revenue=stats.revenue)
        if include_stats else None,
    })


def _serialize_one(db: Session, show: Show, include_stats: bool = False) -> ShowSchema:
    stats = show_service.get_show_stats(db, [show.id])[show.id]
    return serialize_show(show, stats, include_stats)


# ---------------------------------------------------------------------------
# GET /shows: listing (public, discovery or manage mode)
# ---------------------------------------------------------------------------


@router.get("/", response_model=PaginatedResponse[ShowSchema])
def list_shows(
    mode: Optional[ShowListMode] = Query(
        None, description="public | discovery | manage (defaults by role)"
    ),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    """Shows visible to the caller, soonest first."""
    total = show_service.count_shows(db, actor, mode)
    listings = show_service.list_shows(
        db, actor, mode, offset=(page - 1) * limit, limit=limit
    )
    include_stats = mode is ShowListMode.MANAGE and actor is not None

    return PaginatedResponse(
        data=[serialize_show(item.show, item.stats, include_stats) for item in listings],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


# ---------------------------------------------------------------------------
# POST /shows: create a draft
# ---------------------------------------------------------------------------


@router.post("/", response_model=ShowSchema, status_code=status.HTTP_201_CREATED)
def create_show(
    data: ShowCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Create an unpublished show. Verified organizers, verified comedians and admins only."""
    show = show_service.create_show(db, actor, data)
    return _serialize_one(db, show, include_stats=True)


# ---------------------------------------------------------------------------
# GET /shows/{id}
# ---------------------------------------------------------------------------


@router.get("/{show_id}", response_model=ShowSchema)
def get_show(
    show_id: UUID,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    show = show_service.get_show(db, show_id, actor)
    include_stats = actor is not None and actor.can_manage(show.created_by)
    return _serialize_one(db, show, include_stats)


# ---------------------------------------------------------------------------
# PUT/PATCH /shows/{id}: partial update; only sent fields are applied
# ---------------------------------------------------------------------------


@router.put("/{show_id}", response_model=ShowSchema)
@router.patch("/{show_id}", response_model=ShowSchema)
def update_show(
    show_id: UUID,
    data: ShowUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    show = show_service.update_show(db, actor, show_id, data)
    return _serialize_one(db, show, include_stats=True)


# ---------------------------------------------------------------------------
# DELETE /shows/{id}
# ---------------------------------------------------------------------------


@router.delete("/{show_id}", response_model=MessageResponse)
def delete_show(
    show_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Delete a show that has no bookings, with its inventory and comedian links."""
    show_service.delete_show(db, actor, show_id)
    return MessageResponse(message="Show deleted successfully", id=str(show_id))


# ---------------------------------------------------------------------------
# POST /shows/{id}/publish | /unpublish
# ---------------------------------------------------------------------------


@router.post("/{show_id}/publish", response_model=ShowSchema)
def publish_show(
    show_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    show = show_service.publish_show(db, actor, show_id)
    return _serialize_one(db, show, include_stats=True)


@router.post("/{show_id}/unpublish", response_model=ShowSchema)
def unpublish_show(
    show_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    show = show_service.unpublish_show(db, actor, show_id)
    return _serialize_one(db, show, include_stats=True)
