import uuid
from sqlalchemy import Column, String, DateTime, func, Float, Uuid, JSON
from comedy_connect.db.session import Base

PLATFORM_FEES_KEY = "PLATFORM_FEES"

class PlatformConfig(Base):
    __tablename__ = "platform_config"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    key = Column(String(50), unique=True, nullable=False, default=PLATFORM_FEES_KEY)
    platform_fee_percent = Column(Float, nullable=False)
    fee_slabs = Column(JSON, nullable=False)  # [{"min_price", "max_price", "fee"}], fee as a fraction
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
