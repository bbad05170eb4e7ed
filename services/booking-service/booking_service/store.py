import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_core import BookingRecord, CandidateRequest, Conflict, Inserted, ReservationResult, check_reservation
from booking_core.catalogue import ServiceCatalogue
from booking_core.durations import TIER_PACKAGE_NAMES

from .locks import lock_key, reservation_lock
from .models import Booking

STATUS_PENDING = "PENDING"
STATUS_PAID = "PAID"


def to_record(booking: Booking) -> BookingRecord:
    return BookingRecord.from_row(
        booking.booking_date,
        booking.time_slot,
        booking.experience_tier,
        booking.package_type,
    )


async def load_bookings(
    db: AsyncSession,
    service_type: str,
    venue: str,
    booking_date: date,
    for_update: bool = False,
) -> list[Booking]:
    stmt = select(Booking).where(
        Booking.service_type == service_type,
        Booking.venue == venue,
        Booking.booking_date == booking_date,
    )
    if for_update:
        stmt = stmt.with_for_update()
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def load_records(db: AsyncSession, service_type: str, venue: str, booking_date: date) -> list[BookingRecord]:
    return [to_record(b) for b in await load_bookings(db, service_type, venue, booking_date)]


async def load_records_between(
    db: AsyncSession,
    service_type: str,
    venue: str,
    start: date,
    end: date,
) -> list[BookingRecord]:
    res = await db.execute(
        select(Booking).where(
            Booking.service_type == service_type,
            Booking.venue == venue,
            Booking.booking_date >= start,
            Booking.booking_date <= end,
        )
    )
    return [to_record(b) for b in res.scalars().all()]


async def get_booking(db: AsyncSession, booking_id: str) -> Booking | None:
    res = await db.execute(select(Booking).where(Booking.booking_id == booking_id))
    return res.scalar_one_or_none()


async def reserve_booking(db: AsyncSession, catalogue: ServiceCatalogue, data) -> ReservationResult:
    """
    Atomic read-check-insert for one (service, venue, date).
    Returns Inserted(booking) or Conflict; never stores an overlapping row.
    Raises InvalidSlotLabel for a slot outside the catalogue.
    """
    service_type = catalogue.service.value
    tier_or_package = data.experience_tier or data.package_type
    candidate = CandidateRequest(data.booking_date, data.time_slot, tier_or_package)

    # reject bad input before taking the lock
    catalogue.require_slot(candidate.slot_label)

    async with reservation_lock(lock_key(service_type, data.venue, data.booking_date)):
        existing = await load_bookings(db, service_type, data.venue, data.booking_date, for_update=True)
        conflict = check_reservation(candidate, [to_record(b) for b in existing], catalogue)
        if conflict:
            await db.rollback()
            return conflict

        package_type = data.package_type
        if data.experience_tier:
            package_type = TIER_PACKAGE_NAMES[catalogue.service].get(data.experience_tier) or package_type

        booking = Booking(
            booking_id=str(uuid.uuid4()),
            service_type=service_type,
            venue=data.venue,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            booking_date=data.booking_date,
            time_slot=data.time_slot,
            package_type=package_type,
            experience_tier=data.experience_tier,
            package_price=data.package_price,
            status=STATUS_PENDING,
        )
        db.add(booking)
        await db.commit()
        return Inserted(booking)


async def update_payment_status(
    db: AsyncSession,
    booking_id: str,
    payment_intent_id: str | None,
    payment_status: str,
    status: str,
) -> Booking | None:
    booking = await get_booking(db, booking_id)
    if not booking:
        return None

    booking.status = status
    booking.payment_status = payment_status
    if payment_intent_id:
        booking.payment_intent_id = payment_intent_id
    await db.commit()
    return booking
