from typing import Optional, List
from datetime import datetime

from comedy_connect.schemas.common import CamelModel


# A booking-fee slab; `fee` is a fraction of the ticket total (0.07 == 7%)
class FeeSlab(CamelModel):
    min_price: int
    max_price: int
    fee: float


class PlatformConfig(CamelModel):
    platform_fee_percent: float
    fee_slabs: List[FeeSlab]
    updated_at: Optional[datetime] = None


# Admin: PUT /admin/fees
class PlatformConfigUpdate(CamelModel):
    platform_fee_percent: Optional[float] = None
    fee_slabs: Optional[List[FeeSlab]] = None


# Admin: organizer/comedian fee override
class CreatorFeeUpdate(CamelModel):
    custom_platform_fee: Optional[float] = None
