import re
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, model_validator

_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_TIERS = {"standard", "premium", "deluxe"}

ServiceType = Literal["spa", "cinema"]


class CreateBookingRequest(BaseModel):
    service_type: ServiceType
    full_name: str
    email: str
    phone: str
    booking_date: date
    time_slot: str
    package_price: float
    experience_tier: Optional[str] = None
    package_type: Optional[str] = None
    venue: str = "main"

    @model_validator(mode="after")
    def _normalize(self):
        for name in ("full_name", "email", "phone", "time_slot"):
            value = (getattr(self, name) or "").strip()
            if not value:
                raise ValueError(f"{name} is required")
            object.__setattr__(self, name, value)

        if not _EMAIL_RE.match(self.email):
            raise ValueError("Invalid email format")

        if self.experience_tier is not None:
            tier = self.experience_tier.strip().lower()
            if tier not in _TIERS:
                raise ValueError(f"Invalid experience tier: {self.experience_tier}. Allowed: {sorted(_TIERS)}")
            object.__setattr__(self, "experience_tier", tier)
        elif not (self.package_type or "").strip():
            raise ValueError("experience_tier or package_type is required")
        return self


class BookingResponse(BaseModel):
    booking_id: str
    service_type: str
    venue: str
    status: str
    full_name: str
    email: str
    booking_date: date
    time_slot: str
    package_type: str
    experience_tier: Optional[str] = None
    package_price: float
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None


class AvailabilityCheckRequest(BaseModel):
    booking_date: date
    time_slot: str
    experience_tier: Optional[str] = None
    package_type: Optional[str] = None
    venue: str = "main"


class AvailabilityCheckResponse(BaseModel):
    service_type: str
    booking_date: date
    time_slot: str
    available: bool
    availability_unknown: bool = False


class DayAvailabilityResponse(BaseModel):
    service_type: str
    venue: str
    booking_date: date
    blocked_slots: List[str]
    available_slots: List[str]
    fully_booked: bool
    availability_unknown: bool = False


class FullyBookedDatesResponse(BaseModel):
    service_type: str
    venue: str
    start: date
    end: date
    dates: List[date]
    availability_unknown: bool = False


class TierInfo(BaseModel):
    tier: str
    package_type: str
    duration_minutes: int
    price: float


class CatalogueResponse(BaseModel):
    service_type: str
    slot_labels: List[str]
    tiers: List[TierInfo]
    cleaning_gap_minutes: int
