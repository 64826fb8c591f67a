"""
Shared fixtures: an in-memory SQLite database per test, user/show factories and
an API client whose `get_db` dependency points at that database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_DATABASE_ON_STARTUP", "false")

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from comedy_connect.core.roles import Actor, Role
from comedy_connect.core.security import create_access_token
from comedy_connect.db.base import Base
from comedy_connect.db.session import get_db
from comedy_connect.main import app
from comedy_connect.models import (
    Booking,
    BookingStatus,
    ComedianProfile,
    OrganizerProfile,
    Show,
    TicketInventory,
    User,
)
from comedy_connect.models.profile import ApprovalStatus
from comedy_connect.utils.dates import utcnow


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: Role = Role.AUDIENCE, email: str = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            full_name=f"User {counter['n']}",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def organizer(make_user):
    user = make_user(Role.ORGANIZER_VERIFIED)
    return user


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def audience(make_user):
    return make_user(Role.AUDIENCE)


def actor_for(user: User) -> Actor:
    return Actor(user_id=user.id, role=user.role)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def make_organizer_profile(db):
    def _make(user: User, status: ApprovalStatus = ApprovalStatus.APPROVED) -> OrganizerProfile:
        profile = OrganizerProfile(user_id=user.id, name=f"{user.full_name} Presents", approval_status=status)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def make_comedian(db):
    def _make(
        stage_name: str,
        creator: User,
        user: User = None,
        status: ApprovalStatus = ApprovalStatus.APPROVED,
    ) -> ComedianProfile:
        """`user` links the profile to a comedian account; leave it out for organizer-added acts."""
        profile = ComedianProfile(
            user_id=user.id if user else None,
            created_by=creator.id,
            stage_name=stage_name,
            approval_status=status,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def make_show(db):
    """Insert a show and its inventory directly, bypassing creation checks."""

    def _make(
        creator: User,
        *,
        days_ahead: float = 7,
        total_tickets: int = 10,
        available: int = None,
        ticket_price: int = 300,
        is_published: bool = False,
        title: str = "Late Night Laughs",
    ) -> Show:
        show = Show(
            title=title,
            date=utcnow() + timedelta(days=days_ahead),
            venue="The Basement",
            google_maps_link="https://maps.example.com/basement",
            ticket_price=ticket_price,
            total_tickets=total_tickets,
            is_published=is_published,
            created_by=creator.id,
        )
        db.add(show)
        db.flush()
        db.add(TicketInventory(
            show_id=show.id,
            available=total_tickets if available is None else available,
        ))
        db.commit()
        db.refresh(show)
        return show

    return _make


@pytest.fixture
def make_booking(db):
    """Insert a booking row directly and take its tickets out of inventory."""

    def _make(show: Show, user: User, quantity: int = 1,
              status: BookingStatus = BookingStatus.CONFIRMED) -> Booking:
        booking = Booking(
            show_id=show.id,
            user_id=user.id,
            quantity=quantity,
            total_amount=float(show.ticket_price * quantity),
            platform_fee=0.0,
            booking_fee=0.0,
            status=status,
        )
        db.add(booking)
        inventory = db.get(TicketInventory, show.id)
        inventory.available -= quantity
        db.commit()
        db.refresh(booking)
        return booking

    return _make
