from datetime import date
from types import SimpleNamespace

from booking_core import BookingRecord

DAY = date(2025, 6, 14)


def rec(slot: str, tier: str | None = "standard", day: date = DAY) -> BookingRecord:
    return BookingRecord(day, slot, tier)


def booking_payload(**overrides) -> dict:
    payload = {
        "service_type": "spa",
        "full_name": "Alex Morgan",
        "email": "alex@example.com",
        "phone": "+447700900123",
        "booking_date": DAY.isoformat(),
        "time_slot": "10:00 AM",
        "experience_tier": "premium",
        "package_price": 70,
    }
    payload.update(overrides)
    return payload


def reservation_request(**overrides) -> SimpleNamespace:
    data = dict(
        full_name="Alex Morgan",
        email="alex@example.com",
        phone="+447700900123",
        booking_date=DAY,
        time_slot="10:00 AM",
        experience_tier="premium",
        package_type=None,
        package_price=70,
        venue="main",
    )
    data.update(overrides)
    return SimpleNamespace(**data)
