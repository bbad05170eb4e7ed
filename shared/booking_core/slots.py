from collections import defaultdict
from datetime import date, timedelta
from functools import partial

from .catalogue import DEFAULT_CLEANING_GAP_MINUTES, ServiceCatalogue
from .durations import duration_minutes
from .intervals import Interval, as_date, overlaps, slot_start, to_interval
from .records import BookingRecord

SLOT_WIDTH_MINUTES = 60


def duration_resolver(service):
    # a catalogue resolves through its own tier table; a bare service kind uses the built-in one
    if isinstance(service, ServiceCatalogue):
        return service.duration_for
    return partial(duration_minutes, service)


def blocked_window(service, booking: BookingRecord, cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES) -> Interval:
    duration = duration_resolver(service)(booking.tier_or_package)
    return to_interval(booking.date, booking.slot_label, duration).extended(cleaning_gap_minutes)


def slot_window(day, slot_label: str) -> Interval:
    start = slot_start(day, slot_label)
    return Interval(start, start + timedelta(minutes=SLOT_WIDTH_MINUTES))


def blocked_slots(
    day,
    catalogue_slots,
    bookings,
    service,
    cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES,
) -> set[str]:
    """
    Catalogue slots whose one-hour window overlaps any booking's session
    plus cleaning gap.
    """
    day = as_date(day)
    windows = [blocked_window(service, b, cleaning_gap_minutes) for b in bookings]
    if not windows:
        return set()

    blocked = set()
    for label in catalogue_slots:
        sw = slot_window(day, label)
        if any(overlaps(sw, w) for w in windows):
            blocked.add(label)
    return blocked


def available_slots(
    day,
    catalogue_slots,
    bookings,
    service,
    cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES,
) -> list[str]:
    blocked = blocked_slots(day, catalogue_slots, bookings, service, cleaning_gap_minutes)
    return [s for s in catalogue_slots if s not in blocked]


def is_fully_booked(blocked, catalogue_slots) -> bool:
    catalogue_slots = list(catalogue_slots)
    if not catalogue_slots:
        return False
    return len(blocked) >= len(catalogue_slots)


def is_available(
    day,
    candidate_slot: str,
    candidate_duration: int,
    bookings,
    service,
    cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES,
) -> bool:
    """
    Only existing bookings carry the trailing cleaning gap; the candidate's
    own interval is compared unbuffered.
    """
    requested = to_interval(day, candidate_slot, candidate_duration)
    for b in bookings:
        if overlaps(requested, blocked_window(service, b, cleaning_gap_minutes)):
            return False
    return True


def fully_booked_dates(
    bookings,
    catalogue_slots,
    service,
    cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES,
) -> set[date]:
    by_date = defaultdict(list)
    for b in bookings:
        by_date[b.date].append(b)

    full = set()
    for day, day_bookings in by_date.items():
        blocked = blocked_slots(day, catalogue_slots, day_bookings, service, cleaning_gap_minutes)
        if is_fully_booked(blocked, catalogue_slots):
            full.add(day)
    return full


class SlotEvaluator:
    def __init__(self, catalogue: ServiceCatalogue):
        self.catalogue = catalogue

    @property
    def _args(self):
        return self.catalogue, self.catalogue.cleaning_gap_minutes

    def blocked_slots(self, day, bookings) -> set[str]:
        return blocked_slots(day, self.catalogue.slot_labels, bookings, *self._args)

    def available_slots(self, day, bookings) -> list[str]:
        return available_slots(day, self.catalogue.slot_labels, bookings, *self._args)

    def is_fully_booked(self, day, bookings) -> bool:
        return is_fully_booked(self.blocked_slots(day, bookings), self.catalogue.slot_labels)

    def is_available(self, day, slot_label: str, tier_or_package: str | None, bookings) -> bool:
        duration = self.catalogue.duration_for(tier_or_package)
        return is_available(day, slot_label, duration, bookings, *self._args)

    def fully_booked_dates(self, bookings) -> set[date]:
        return fully_booked_dates(bookings, self.catalogue.slot_labels, *self._args)
