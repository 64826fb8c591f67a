"""
Which shows a given caller may see.

``build_visibility_filter`` is a pure function: it only turns the caller and
the requested listing mode into a SQLAlchemy predicate over ``Show``. It never
touches the session.
"""
import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from comedy_connect.core.roles import Actor, Role
from comedy_connect.models.show import Show
from comedy_connect.utils.dates import utcnow


class ShowListMode(str, enum.Enum):
    PUBLIC = "public"
    DISCOVERY = "discovery"
    MANAGE = "manage"


def _published_upcoming(now: datetime) -> ColumnElement:
    return and_(Show.is_published == true(), Show.date >= now)


def build_visibility_filter(
    actor: Optional[Actor],
    mode: Optional[ShowListMode] = None,
    now: Optional[datetime] = None,
) -> ColumnElement:
    """
    Build the listing predicate for ``actor`` in ``mode``.

    - manage (signed in): the caller's own shows, drafts and past shows included
    - public / discovery, guests and audience: published upcoming shows
    - organizers and comedians: upcoming shows that are published or their own
    - admins: every upcoming show
    """
    now = now or utcnow()

    if mode is ShowListMode.MANAGE and actor is not None:
        return Show.created_by == actor.user_id

    if mode in (ShowListMode.PUBLIC, ShowListMode.DISCOVERY):
        return _published_upcoming(now)

    if actor is None or actor.role is Role.AUDIENCE:
        return _published_upcoming(now)

    if actor.role.is_creator:
        return and_(
            Show.date >= now,
            or_(Show.is_published == true(), Show.created_by == actor.user_id),
        )

    if actor.role is Role.ADMIN:
        return Show.date >= now

    return _published_upcoming(now)


def can_view_show(show: Show, actor: Optional[Actor]) -> bool:
    """Drafts are visible only to their creator and admins."""
    if show.is_published:
        return True
    return actor is not None and actor.can_manage(show.created_by)
