import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, Text, Float, Uuid, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from comedy_connect.db.session import Base

class ApprovalStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

class OrganizerProfile(Base):
    __tablename__ = "organizer_profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    contact = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    custom_platform_fee = Column(Float, nullable=True)  # percent, overrides the platform default

    # Approval audit trail
    approval_status = Column(SAEnum(ApprovalStatus, native_enum=False), nullable=False, default=ApprovalStatus.PENDING)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Uuid, ForeignKey("users.id"), nullable=True)
    admin_note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="organizer_profile", foreign_keys=[user_id])

class ComedianProfile(Base):
    __tablename__ = "comedian_profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), unique=True, nullable=True)  # NULL for comedians added by an organizer
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    stage_name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    profile_image_url = Column(Text, nullable=True)
    youtube_urls = Column(JSON, nullable=True)
    instagram_urls = Column(JSON, nullable=True)
    custom_platform_fee = Column(Float, nullable=True)

    approval_status = Column(SAEnum(ApprovalStatus, native_enum=False), nullable=False, default=ApprovalStatus.PENDING)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Uuid, ForeignKey("users.id"), nullable=True)
    admin_note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="comedian_profile", foreign_keys=[user_id])
    show_links = relationship("ShowComedian", back_populates="comedian")
