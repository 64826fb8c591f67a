import uuid
from sqlalchemy import (
    Column, String, Boolean, DateTime, func, Text, Integer, Float, Uuid, JSON,
    ForeignKey, CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from comedy_connect.db.session import Base

class Show(Base):
    __tablename__ = "shows"
    __table_args__ = (
        CheckConstraint("ticket_price > 0", name="ck_shows_ticket_price_positive"),
        CheckConstraint("total_tickets >= 0", name="ck_shows_total_tickets_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    venue = Column(String(255), nullable=False)
    google_maps_link = Column(Text, nullable=False)
    ticket_price = Column(Integer, nullable=False)
    total_tickets = Column(Integer, nullable=False)
    poster_image_url = Column(Text, nullable=True)
    youtube_urls = Column(JSON, nullable=True)
    instagram_urls = Column(JSON, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    is_disbursed = Column(Boolean, default=False, nullable=False)
    custom_platform_fee = Column(Float, nullable=True)  # percent
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    creator = relationship("User", back_populates="shows")
    inventory = relationship("TicketInventory", back_populates="show", uselist=False, cascade="all, delete-orphan")
    show_comedians = relationship(
        "ShowComedian", back_populates="show", cascade="all, delete-orphan",
        order_by="ShowComedian.order",
    )
    bookings = relationship("Booking", back_populates="show", cascade="all, delete-orphan")

class TicketInventory(Base):
    __tablename__ = "ticket_inventory"
    __table_args__ = (
        CheckConstraint("available >= 0", name="ck_ticket_inventory_available_non_negative"),
    )

    show_id = Column(Uuid, ForeignKey("shows.id", ondelete="CASCADE"), primary_key=True)
    available = Column(Integer, nullable=False)

    show = relationship("Show", back_populates="inventory")

class ShowComedian(Base):
    __tablename__ = "show_comedians"
    __table_args__ = (
        UniqueConstraint("show_id", "comedian_id", name="uq_show_comedians_show_comedian"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    show_id = Column(Uuid, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True)
    comedian_id = Column(Uuid, ForeignKey("comedian_profiles.id"), nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0)  # billing order

    show = relationship("Show", back_populates="show_comedians")
    comedian = relationship("ComedianProfile", back_populates="show_links")
