import uuid
import enum
from sqlalchemy import Column, DateTime, func, Integer, Float, Uuid, ForeignKey, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from comedy_connect.db.session import Base

MAX_TICKETS_PER_BOOKING = 10

class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED_UNPAID = "CONFIRMED_UNPAID"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

# Statuses that hold inventory. CANCELLED and FAILED bookings have released theirs.
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED_UNPAID,
    BookingStatus.CONFIRMED,
)

# Statuses that count as sales in organizer stats
SOLD_BOOKING_STATUSES = (
    BookingStatus.CONFIRMED_UNPAID,
    BookingStatus.CONFIRMED,
)

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("quantity >= 1 AND quantity <= 10", name="ck_bookings_quantity_range"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    show_id = Column(Uuid, ForeignKey("shows.id"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    total_amount = Column(Float, nullable=False)
    platform_fee = Column(Float, nullable=False, default=0)
    booking_fee = Column(Float, nullable=False, default=0)
    status = Column(SAEnum(BookingStatus, native_enum=False), nullable=False, default=BookingStatus.CONFIRMED_UNPAID, index=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    show = relationship("Show", back_populates="bookings")
    user = relationship("User", back_populates="bookings")
