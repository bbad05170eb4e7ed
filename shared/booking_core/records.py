from dataclasses import dataclass
from datetime import date

from .intervals import as_date


@dataclass(frozen=True)
class BookingRecord:
    """
    What the engine needs from a stored reservation. Pending and paid rows
    are projected the same way; both block.
    """
    date: date
    slot_label: str
    tier_or_package: str | None = None

    @classmethod
    def from_row(cls, booking_date, time_slot: str, experience_tier: str | None = None, package_type: str | None = None):
        # experience tier wins over the legacy package name
        return cls(
            date=as_date(booking_date),
            slot_label=time_slot,
            tier_or_package=experience_tier or package_type,
        )


@dataclass(frozen=True)
class CandidateRequest:
    date: date
    slot_label: str
    tier_or_package: str | None = None

    def as_record(self) -> BookingRecord:
        return BookingRecord(self.date, self.slot_label, self.tier_or_package)
