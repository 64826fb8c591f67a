from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise a datetime to aware UTC.

    Naive values are treated as UTC. SQLite hands back naive datetimes even for
    ``DateTime(timezone=True)`` columns, so anything read from the database
    goes through here before being compared with ``utcnow()``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_future(value: datetime) -> bool:
    return as_utc(value) > utcnow()
