import pytest

from booking_core import SPA_CATALOGUE, CandidateRequest, Conflict, InvalidSlotLabel, ServiceCatalogue, ServiceKind, check_reservation

from .helpers import DAY, rec


def test_check_reservation_passes_on_empty_day():
    assert check_reservation(CandidateRequest(DAY, "10:00 AM", "premium"), [], SPA_CATALOGUE) is None


def test_check_reservation_conflict():
    existing = [rec("10:00 AM", "premium")]
    result = check_reservation(CandidateRequest(DAY, "11:00 AM", "standard"), existing, SPA_CATALOGUE)
    assert result == Conflict()
    assert result.reason == "slot_no_longer_available"


def test_check_reservation_after_buffer():
    existing = [rec("10:00 AM", "premium")]
    assert check_reservation(CandidateRequest(DAY, "12:00 PM", "standard"), existing, SPA_CATALOGUE) is None


def test_check_reservation_rejects_off_catalogue_slot():
    with pytest.raises(InvalidSlotLabel):
        check_reservation(CandidateRequest(DAY, "11:30 AM", "standard"), [], SPA_CATALOGUE)


def test_candidate_as_record():
    c = CandidateRequest(DAY, "10:00 AM", "deluxe")
    assert c.as_record() == rec("10:00 AM", "deluxe")


def test_check_reservation_uses_catalogue_durations():
    long_spa = ServiceCatalogue(
        service=ServiceKind.SPA,
        slot_labels=SPA_CATALOGUE.slot_labels,
        tier_durations={"standard": 180},
    )
    existing = [rec("10:00 AM", "standard")]
    assert check_reservation(CandidateRequest(DAY, "01:00 PM", "standard"), existing, long_spa) == Conflict()
    assert check_reservation(CandidateRequest(DAY, "01:00 PM", "standard"), existing, SPA_CATALOGUE) is None
