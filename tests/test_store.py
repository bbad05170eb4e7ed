import asyncio
import pytest

from booking_core import SPA_CATALOGUE, Conflict, Inserted, InvalidSlotLabel

from booking_service.store import (
    STATUS_PAID,
    STATUS_PENDING,
    get_booking,
    load_records,
    reserve_booking,
    update_payment_status,
)

from .helpers import DAY, reservation_request as request


async def test_reserve_inserts_pending_booking(db, fake_redis):
    result = await reserve_booking(db, SPA_CATALOGUE, request())

    assert isinstance(result, Inserted)
    booking = result.booking
    assert booking.status == STATUS_PENDING
    assert booking.package_type == "1.5 Hour Session"
    assert (await get_booking(db, booking.booking_id)).time_slot == "10:00 AM"


async def test_reserve_conflicts_inside_blocked_window(db, fake_redis):
    await reserve_booking(db, SPA_CATALOGUE, request())
    result = await reserve_booking(db, SPA_CATALOGUE, request(time_slot="11:00 AM", experience_tier="standard"))

    assert result == Conflict()
    records = await load_records(db, "spa", "main", DAY)
    assert [r.slot_label for r in records] == ["10:00 AM"]


async def test_reserve_after_buffer_succeeds(db, fake_redis):
    await reserve_booking(db, SPA_CATALOGUE, request())
    result = await reserve_booking(db, SPA_CATALOGUE, request(time_slot="12:00 PM"))
    assert isinstance(result, Inserted)


async def test_other_venue_and_service_do_not_conflict(db, fake_redis):
    await reserve_booking(db, SPA_CATALOGUE, request())
    result = await reserve_booking(db, SPA_CATALOGUE, request(venue="annex"))
    assert isinstance(result, Inserted)


async def test_legacy_package_booking(db, fake_redis):
    result = await reserve_booking(
        db, SPA_CATALOGUE, request(experience_tier=None, package_type="2 Hour Premium Session")
    )
    assert result.booking.package_type == "2 Hour Premium Session"

    # 10:00-12:00 plus gap blocks the 12:00 PM start
    again = await reserve_booking(db, SPA_CATALOGUE, request(time_slot="12:00 PM"))
    assert isinstance(again, Conflict)


async def test_reserve_rejects_off_catalogue_slot(db, fake_redis):
    with pytest.raises(InvalidSlotLabel):
        await reserve_booking(db, SPA_CATALOGUE, request(time_slot="11:30 AM"))
    assert await fake_redis.keys("booking_lock:*") == []


async def test_concurrent_reservations_only_one_wins(session_factory, fake_redis):
    async def attempt(slot):
        async with session_factory() as session:
            return await reserve_booking(session, SPA_CATALOGUE, request(time_slot=slot))

    results = await asyncio.gather(attempt("10:00 AM"), attempt("11:00 AM"), attempt("10:00 AM"))

    inserted = [r for r in results if isinstance(r, Inserted)]
    assert len(inserted) == 1
    assert sum(isinstance(r, Conflict) for r in results) == 2

    async with session_factory() as session:
        assert len(await load_records(session, "spa", "main", DAY)) == 1


async def test_lock_released_after_reservation(db, fake_redis):
    await reserve_booking(db, SPA_CATALOGUE, request())
    assert await fake_redis.keys("booking_lock:*") == []


async def test_update_payment_status(db, fake_redis):
    result = await reserve_booking(db, SPA_CATALOGUE, request())
    booking = await update_payment_status(db, result.booking.booking_id, "pi_123", "succeeded", STATUS_PAID)

    assert booking.status == STATUS_PAID
    assert booking.payment_intent_id == "pi_123"
    assert await update_payment_status(db, "missing", None, "failed", STATUS_PENDING) is None
