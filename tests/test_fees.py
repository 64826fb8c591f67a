import pytest

from comedy_connect.core.errors import ValidationError
from comedy_connect.core.config import settings
from comedy_connect.schemas.fees import FeeSlab
from comedy_connect.services import fees


@pytest.mark.parametrize(
    "price, expected_rate",
    [(0, 0.07), (199, 0.07), (200, 0.08), (400, 0.08), (401, 0.09), (5000, 0.09)],
)
def test_booking_fee_uses_the_slab_containing_the_ticket_price(price, expected_rate):
    total = float(price * 2)
    fee = fees.calculate_booking_fee(price, total, settings.DEFAULT_FEE_SLABS)
    assert fee == pytest.approx(total * expected_rate)


def test_booking_fee_falls_back_to_default_percent_outside_every_slab():
    slabs = [{"min_price": 0, "max_price": 100, "fee": 0.05}]
    fee = fees.calculate_booking_fee(150, 300.0, slabs)
    assert fee == pytest.approx(300.0 * settings.DEFAULT_BOOKING_FEE_PERCENT / 100)


def test_platform_fee_prefers_show_override(db, organizer, make_show, make_organizer_profile):
    profile = make_organizer_profile(organizer)
    profile.custom_platform_fee = 5.0
    show = make_show(organizer)
    show.custom_platform_fee = 12.0
    db.commit()

    assert fees.platform_fee_percent_for(db, show) == 12.0


def test_platform_fee_uses_creator_override_before_default(db, organizer, make_show, make_organizer_profile):
    profile = make_organizer_profile(organizer)
    profile.custom_platform_fee = 5.0
    db.commit()
    show = make_show(organizer)

    assert fees.platform_fee_percent_for(db, show) == 5.0
    assert fees.calculate_platform_fee(db, show, 1000.0) == pytest.approx(50.0)


def test_platform_fee_defaults_to_settings(db, organizer, make_show):
    show = make_show(organizer)
    assert fees.platform_fee_percent_for(db, show) == settings.DEFAULT_PLATFORM_FEE_PERCENT


def test_get_platform_config_creates_defaults_once(db):
    first = fees.get_platform_config(db)
    second = fees.get_platform_config(db)

    assert first.id == second.id
    assert first.platform_fee_percent == settings.DEFAULT_PLATFORM_FEE_PERCENT
    assert len(first.fee_slabs) == 3


def test_update_platform_config_changes_what_bookings_use(db, organizer, make_show):
    fees.update_platform_config(
        db,
        platform_fee_percent=10.0,
        fee_slabs=[FeeSlab(min_price=0, max_price=1000000, fee=0.05)],
    )
    show = make_show(organizer)

    assert fees.platform_fee_percent_for(db, show) == 10.0
    assert fees.get_fee_slabs(db) == [{"min_price": 0, "max_price": 1000000, "fee": 0.05}]


@pytest.mark.parametrize("percent", [-1, 100.5])
def test_update_platform_config_rejects_bad_percent(db, percent):
    with pytest.raises(ValidationError, match="0-100"):
        fees.update_platform_config(db, platform_fee_percent=percent)


def test_update_platform_config_rejects_inverted_slab(db):
    with pytest.raises(ValidationError, match="Invalid fee slab range"):
        fees.update_platform_config(db, fee_slabs=[FeeSlab(min_price=500, max_price=100, fee=0.1)])
