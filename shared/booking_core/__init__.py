from .catalogue import (
    CATALOGUES,
    CINEMA_CATALOGUE,
    DEFAULT_CLEANING_GAP_MINUTES,
    SPA_CATALOGUE,
    ServiceCatalogue,
    get_catalogue,
)
from .durations import ServiceKind, duration_minutes, resolve_booking_duration
from .errors import AvailabilityError, InvalidSlotLabel, PriceMismatch, SlotNoLongerAvailable
from .intervals import Interval, overlaps, parse_slot_label, to_interval
from .records import BookingRecord, CandidateRequest
from .reservation import Conflict, Inserted, ReservationResult, check_reservation
from .slots import (
    SlotEvaluator,
    available_slots,
    blocked_slots,
    fully_booked_dates,
    is_available,
    is_fully_booked,
)
