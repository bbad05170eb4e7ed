from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_core import (
    CATALOGUES,
    Conflict,
    InvalidSlotLabel,
    PriceMismatch,
    ServiceKind,
    SlotNoLongerAvailable,
    SlotEvaluator,
    is_fully_booked,
)
from booking_core.durations import TIER_PACKAGE_NAMES

from .config import CLEANING_GAP_MINUTES, FULLY_BOOKED_DEFAULT_DAYS, FULLY_BOOKED_MAX_DAYS
from .db import SessionLocal
from .locks import ReservationLockTimeout
from .logs import log
from .models import Booking
from .rabbitmq import publisher
from .schemas import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    BookingResponse,
    CatalogueResponse,
    CreateBookingRequest,
    DayAvailabilityResponse,
    FullyBookedDatesResponse,
    ServiceType,
    TierInfo,
)
from .store import get_booking, load_records, load_records_between, reserve_booking

router = APIRouter()

catalogues = {kind: c.with_cleaning_gap(CLEANING_GAP_MINUTES) for kind, c in CATALOGUES.items()}


async def get_db():
    async with SessionLocal() as session:
        yield session


def catalogue_for(service_type: str):
    return catalogues[ServiceKind(service_type)]


def to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        booking_id=booking.booking_id,
        service_type=booking.service_type,
        venue=booking.venue,
        status=booking.status,
        full_name=booking.full_name,
        email=booking.email,
        booking_date=booking.booking_date,
        time_slot=booking.time_slot,
        package_type=booking.package_type,
        experience_tier=booking.experience_tier,
        package_price=float(booking.package_price),
        payment_status=booking.payment_status,
        created_at=booking.created_at,
    )


@router.get("/catalogue/{service_type}", response_model=CatalogueResponse)
async def get_service_catalogue(service_type: ServiceType):
    catalogue = catalogue_for(service_type)
    tiers = [
        TierInfo(
            tier=tier,
            package_type=TIER_PACKAGE_NAMES[catalogue.service][tier],
            duration_minutes=minutes,
            price=catalogue.tier_prices[tier],
        )
        for tier, minutes in catalogue.tier_durations.items()
    ]
    return CatalogueResponse(
        service_type=service_type,
        slot_labels=list(catalogue.slot_labels),
        tiers=tiers,
        cleaning_gap_minutes=catalogue.cleaning_gap_minutes,
    )


@router.get("/availability/{service_type}/fully-booked", response_model=FullyBookedDatesResponse)
async def get_fully_booked_dates(
    service_type: ServiceType,
    start: date | None = None,
    days: int = Query(FULLY_BOOKED_DEFAULT_DAYS, ge=1, le=FULLY_BOOKED_MAX_DAYS),
    venue: str = "main",
    db: AsyncSession = Depends(get_db),
):
    catalogue = catalogue_for(service_type)
    start = start or date.today()
    end = start + timedelta(days=days - 1)  # inclusive: `days` dates starting at `start`

    unknown = False
    try:
        records = await load_records_between(db, service_type, venue, start, end)
    except SQLAlchemyError as e:
        # fail open: an unreadable store must not grey out the whole calendar
        log("ERROR", "Error fetching bookings for date checking", service_type=service_type, error=str(e))
        records = []
        unknown = True

    dates = sorted(SlotEvaluator(catalogue).fully_booked_dates(records))
    return FullyBookedDatesResponse(
        service_type=service_type,
        venue=venue,
        start=start,
        end=end,
        dates=dates,
        availability_unknown=unknown,
    )


@router.get("/availability/{service_type}/{booking_date}", response_model=DayAvailabilityResponse)
async def get_day_availability(
    service_type: ServiceType,
    booking_date: date,
    venue: str = "main",
    db: AsyncSession = Depends(get_db),
):
    catalogue = catalogue_for(service_type)
    evaluator = SlotEvaluator(catalogue)

    unknown = False
    try:
        records = await load_records(db, service_type, venue, booking_date)
    except SQLAlchemyError as e:
        log("ERROR", "Error getting unavailable slots", service_type=service_type, booking_date=booking_date, error=str(e))
        records = []
        unknown = True

    blocked = evaluator.blocked_slots(booking_date, records)
    return DayAvailabilityResponse(
        service_type=service_type,
        venue=venue,
        booking_date=booking_date,
        blocked_slots=[s for s in catalogue.slot_labels if s in blocked],
        available_slots=[s for s in catalogue.slot_labels if s not in blocked],
        fully_booked=is_fully_booked(blocked, catalogue.slot_labels),
        availability_unknown=unknown,
    )


@router.post("/availability/{service_type}/check", response_model=AvailabilityCheckResponse)
async def check_availability(
    service_type: ServiceType,
    req: AvailabilityCheckRequest,
    db: AsyncSession = Depends(get_db),
):
    catalogue = catalogue_for(service_type)
    try:
        catalogue.require_slot(req.time_slot)
    except InvalidSlotLabel as e:
        raise HTTPException(status_code=400, detail=str(e))

    unknown = False
    try:
        records = await load_records(db, service_type, req.venue, req.booking_date)
    except SQLAlchemyError as e:
        log("ERROR", "Error checking slot availability", service_type=service_type, booking_date=req.booking_date, error=str(e))
        records = []
        unknown = True

    available = SlotEvaluator(catalogue).is_available(
        req.booking_date,
        req.time_slot,
        req.experience_tier or req.package_type,
        records,
    )
    return AvailabilityCheckResponse(
        service_type=service_type,
        booking_date=req.booking_date,
        time_slot=req.time_slot,
        available=available,
        availability_unknown=unknown,
    )


@router.post("/bookings", response_model=BookingResponse)
async def create_booking(data: CreateBookingRequest, db: AsyncSession = Depends(get_db)):
    catalogue = catalogue_for(data.service_type)

    try:
        if data.experience_tier:
            catalogue.check_price(data.experience_tier, data.package_price)
        result = await reserve_booking(db, catalogue, data)
    except (InvalidSlotLabel, PriceMismatch) as e:
        log("WARN", "Booking rejected", service_type=data.service_type, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except ReservationLockTimeout:
        log("WARN", "Reservation lock busy", service_type=data.service_type, booking_date=data.booking_date)
        raise HTTPException(status_code=503, detail="Booking system busy. Please try again.")

    if isinstance(result, Conflict):
        log(
            "WARN",
            "Booking creation failed",
            service_type=data.service_type,
            booking_date=data.booking_date,
            time_slot=data.time_slot,
            reason=result.reason,
        )
        raise SlotNoLongerAvailable(data.time_slot, data.booking_date.isoformat())

    booking = result.booking
    log("INFO", "Booking created successfully", booking_id=booking.booking_id, service_type=booking.service_type)

    await publisher.publish_event(
        "booking.created",
        {
            "booking_id": booking.booking_id,
            "service_type": booking.service_type,
            "venue": booking.venue,
            "booking_date": booking.booking_date.isoformat(),
            "time_slot": booking.time_slot,
            "status": booking.status,
        },
    )
    return to_response(booking)


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(booking_id: str, db: AsyncSession = Depends(get_db)):
    booking = await get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return to_response(booking)
