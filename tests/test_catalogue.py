import pytest

from booking_core import CINEMA_CATALOGUE, SPA_CATALOGUE, InvalidSlotLabel, PriceMismatch, ServiceCatalogue, ServiceKind, get_catalogue


def test_spa_catalogue_slots():
    assert SPA_CATALOGUE.slot_labels[0] == "09:00 AM"
    assert SPA_CATALOGUE.slot_labels[3] == "12:00 PM"
    assert SPA_CATALOGUE.slot_labels[-1] == "08:00 PM"
    assert len(SPA_CATALOGUE.slot_labels) == 12


def test_cinema_catalogue_slots():
    assert CINEMA_CATALOGUE.slot_labels[0] == "10:00 AM"
    assert CINEMA_CATALOGUE.slot_labels[-1] == "09:00 PM"
    assert CINEMA_CATALOGUE.tier_durations == {"standard": 180, "premium": 360, "deluxe": 720}


def test_default_cleaning_gap():
    assert SPA_CATALOGUE.cleaning_gap_minutes == 30
    assert SPA_CATALOGUE.with_cleaning_gap(45).cleaning_gap_minutes == 45


def test_get_catalogue():
    assert get_catalogue("spa") is SPA_CATALOGUE
    assert get_catalogue(ServiceKind.CINEMA) is CINEMA_CATALOGUE


def test_require_slot_rejects_non_catalogue_label():
    with pytest.raises(InvalidSlotLabel):
        SPA_CATALOGUE.require_slot("11:30 AM")
    assert SPA_CATALOGUE.require_slot("11:00 AM") == "11:00 AM"


def test_check_price():
    SPA_CATALOGUE.check_price("premium", 70)
    with pytest.raises(PriceMismatch):
        SPA_CATALOGUE.check_price("premium", 55)
    with pytest.raises(PriceMismatch):
        SPA_CATALOGUE.check_price("gold", 55)


@pytest.mark.parametrize(
    "slots",
    [(), ("10:00 AM", "10:00 AM"), ("10:00",)],
)
def test_catalogue_validation(slots):
    with pytest.raises(ValueError):
        ServiceCatalogue(service=ServiceKind.SPA, slot_labels=slots)


def test_negative_durations_rejected():
    with pytest.raises(ValueError):
        ServiceCatalogue(service=ServiceKind.SPA, slot_labels=("10:00 AM",), tier_durations={"standard": -1})


def test_catalogue_tier_table_drives_durations():
    long_spa = ServiceCatalogue(
        service=ServiceKind.SPA,
        slot_labels=SPA_CATALOGUE.slot_labels,
        tier_durations={"standard": 180, "premium": 90, "deluxe": 120},
    )
    assert long_spa.duration_for("standard") == 180
    assert long_spa.duration_for("Standard ") == 180
    # legacy names and unknown values still resolve
    assert long_spa.duration_for("1.5 Hour Session") == 90
    assert long_spa.duration_for("gold") == 60


def test_catalogue_mappings_are_read_only():
    with pytest.raises(TypeError):
        SPA_CATALOGUE.tier_durations["standard"] = 5
    with pytest.raises(TypeError):
        SPA_CATALOGUE.tier_prices["standard"] = 1
    assert SPA_CATALOGUE.duration_for("standard") == 60


def test_with_cleaning_gap_keeps_tier_table():
    cat = ServiceCatalogue(
        service=ServiceKind.SPA,
        slot_labels=("10:00 AM",),
        tier_durations={"standard": 45},
    ).with_cleaning_gap(10)
    assert cat.duration_for("standard") == 45
