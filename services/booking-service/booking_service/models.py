from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, String

from .db import Base


def _now():
    return datetime.now(timezone.utc)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    booking_id = Column(String, unique=True, nullable=False, index=True)

    service_type = Column(String, nullable=False)  # spa/cinema
    venue = Column(String, nullable=False, default="main")

    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False)

    booking_date = Column(Date, nullable=False)
    time_slot = Column(String, nullable=False)
    package_type = Column(String, nullable=False)
    experience_tier = Column(String, nullable=True)
    package_price = Column(Numeric(10, 2), nullable=False)

    status = Column(String, nullable=False, index=True)  # PENDING/PAID
    payment_intent_id = Column(String, nullable=True)
    payment_status = Column(String, nullable=True)  # succeeded/failed

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        Index("ix_bookings_service_venue_date", "service_type", "venue", "booking_date"),
    )
