"""
Fee calculation and platform fee configuration.

Two fees are taken on every booking:

- the *platform fee* is the platform's cut of the show revenue, deducted from
  the creator's earnings. Its percentage comes from the show override, then
  the creator's organizer/comedian profile override, then the platform default.
- the *booking fee* is charged to the customer on top of the ticket total. Its
  rate comes from the price slab that contains the ticket price.
"""
import logging
from typing import Optional, List

from sqlalchemy.orm import Session

from comedy_connect.core.config import settings
from comedy_connect.core.errors import ValidationError
from comedy_connect.db.session import transaction
from comedy_connect.models.platform_config import PlatformConfig, PLATFORM_FEES_KEY
from comedy_connect.models.show import Show
from comedy_connect.schemas.fees import FeeSlab

logger = logging.getLogger(__name__)


def _find_config(db: Session) -> Optional[PlatformConfig]:
    return db.query(PlatformConfig).filter(PlatformConfig.key == PLATFORM_FEES_KEY).first()


def get_fee_slabs(db: Session) -> List[dict]:
    config = _find_config(db)
    if config and config.fee_slabs:
        return config.fee_slabs
    return settings.DEFAULT_FEE_SLABS


def get_default_platform_fee_percent(db: Session) -> float:
    config = _find_config(db)
    if config and config.platform_fee_percent is not None:
        return config.platform_fee_percent
    return settings.DEFAULT_PLATFORM_FEE_PERCENT


def platform_fee_percent_for(db: Session, show: Show) -> float:
    if show.custom_platform_fee is not None:
        return show.custom_platform_fee

    creator = show.creator
    if creator is not None:
        for profile in (creator.organizer_profile, creator.comedian_profile):
            if profile is not None and profile.custom_platform_fee is not None:
                return profile.custom_platform_fee

    return get_default_platform_fee_percent(db)


def calculate_platform_fee(db: Session, show: Show, total_amount: float) -> float:
    return total_amount * platform_fee_percent_for(db, show) / 100


def calculate_booking_fee(ticket_price: int, total_amount: float, slabs: List[dict]) -> float:
    """Booking fee for `total_amount` using the first slab containing `ticket_price`."""
    for slab in slabs:
        if slab["min_price"] <= ticket_price <= slab["max_price"]:
            return total_amount * slab["fee"]
    return total_amount * settings.DEFAULT_BOOKING_FEE_PERCENT / 100


def validate_fee_percent(percent: Optional[float]) -> None:
    if percent is not None and not 0 <= percent <= 100:
        raise ValidationError("Invalid fee percentage (0-100 required)")


def validate_fee_slabs(slabs: List[FeeSlab]) -> None:
    for slab in slabs:
        if slab.min_price < 0 or slab.max_price < slab.min_price:
            raise ValidationError(
                f"Invalid fee slab range {slab.min_price}-{slab.max_price}"
            )
        if not 0 <= slab.fee <= 1:
            raise ValidationError("Slab fee must be a fraction between 0 and 1")


# ---------------------------------------------------------------------------
# Admin configuration
# ---------------------------------------------------------------------------


def get_platform_config(db: Session) -> PlatformConfig:
    """Return the platform configuration, creating the default row if absent."""
    config = _find_config(db)
    if config:
        return config

    with transaction(db):
        config = PlatformConfig(
            key=PLATFORM_FEES_KEY,
            platform_fee_percent=settings.DEFAULT_PLATFORM_FEE_PERCENT,
            fee_slabs=list(settings.DEFAULT_FEE_SLABS),
        )
        db.add(config)
    db.refresh(config)
    return config


def update_platform_config(
    db: Session,
    platform_fee_percent: Optional[float] = None,
    fee_slabs: Optional[List[FeeSlab]] = None,
) -> PlatformConfig:
    validate_fee_percent(platform_fee_percent)
    if fee_slabs is not None:
        validate_fee_slabs(fee_slabs)

    config = get_platform_config(db)
    with transaction(db):
        if platform_fee_percent is not None:
            config.platform_fee_percent = platform_fee_percent
        if fee_slabs is not None:
            config.fee_slabs = [slab.model_dump() for slab in fee_slabs]

    logger.info(
        "Platform fees updated: platform_fee_percent=%s, %d slab(s)",
        config.platform_fee_percent, len(config.fee_slabs),
    )
    db.refresh(config)
    return config
