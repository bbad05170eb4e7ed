from dataclasses import dataclass
from typing import Any, Union

from .catalogue import ServiceCatalogue
from .records import CandidateRequest
from .slots import is_available

SLOT_CONFLICT = "slot_no_longer_available"


@dataclass(frozen=True)
class Inserted:
    booking: Any


@dataclass(frozen=True)
class Conflict:
    reason: str = SLOT_CONFLICT


ReservationResult = Union[Inserted, Conflict]


def check_reservation(candidate: CandidateRequest, existing, catalogue: ServiceCatalogue) -> Conflict | None:
    """
    Write-time re-validation. Run inside the same atomic unit as the insert;
    the client-side pre-check is advisory only.
    Raises InvalidSlotLabel for a slot outside the catalogue.
    """
    catalogue.require_slot(candidate.slot_label)
    duration = catalogue.duration_for(candidate.tier_or_package)
    ok = is_available(
        candidate.date,
        candidate.slot_label,
        duration,
        existing,
        catalogue,
        catalogue.cleaning_gap_minutes,
    )
    if not ok:
        return Conflict()
    return None
