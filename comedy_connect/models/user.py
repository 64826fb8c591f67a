import uuid
from sqlalchemy import Column, String, Boolean, DateTime, func, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from comedy_connect.db.session import Base
from comedy_connect.core.roles import Role

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    role = Column(SAEnum(Role, native_enum=False, length=32), nullable=False, default=Role.AUDIENCE)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    organizer_profile = relationship(
        "OrganizerProfile", back_populates="user", uselist=False,
        foreign_keys="OrganizerProfile.user_id",
    )
    comedian_profile = relationship(
        "ComedianProfile", back_populates="user", uselist=False,
        foreign_keys="ComedianProfile.user_id",
    )
    shows = relationship("Show", back_populates="creator")
    bookings = relationship("Booking", back_populates="user")
