import re
from datetime import date, datetime, time, timedelta
from typing import NamedTuple

from dateutil import parser

from .errors import InvalidSlotLabel

_SLOT_RE = re.compile(r"^(\d{1,2}):(\d{2}) (AM|PM)$")


class Interval(NamedTuple):
    start: datetime
    end: datetime

    def extended(self, minutes: int) -> "Interval":
        return Interval(self.start, self.end + timedelta(minutes=minutes))


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value!r}")


def parse_slot_label(label: str) -> time:
    """
    "10:00 AM" -> 10:00, "12:00 AM" -> 00:00, "12:30 PM" -> 12:30, "01:00 PM" -> 13:00.
    """
    m = _SLOT_RE.match((label or "").strip().upper()) if isinstance(label, str) else None
    if not m:
        raise InvalidSlotLabel(label)

    hour = int(m.group(1))
    minute = int(m.group(2))
    if not 1 <= hour <= 12 or minute > 59:
        raise InvalidSlotLabel(label)

    if m.group(3) == "AM":
        hour = 0 if hour == 12 else hour
    elif hour != 12:
        hour += 12

    return time(hour, minute)


def slot_start(day, slot_label: str) -> datetime:
    return datetime.combine(as_date(day), parse_slot_label(slot_label))


def to_interval(day, slot_label: str, duration_minutes: int) -> Interval:
    # naive local wall-clock time; venue and customers share one locale
    start = slot_start(day, slot_label)
    return Interval(start, start + timedelta(minutes=duration_minutes))


def overlaps(a: Interval, b: Interval) -> bool:
    # half-open: touching endpoints do not overlap
    return a.start < b.end and b.start < a.end
