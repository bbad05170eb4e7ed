import os

DATABASE_URL = os.getenv("BOOKING_DB") or "sqlite+aiosqlite:///./booking.db"
DATABASE_ISOLATION = os.getenv("BOOKING_DB_ISOLATION")  # e.g. SERIALIZABLE

REDIS_URL = os.getenv("REDIS_URL")
RABBIT_URL = os.getenv("RABBIT_URL")  # optional in dev, required if you want events

SERVICE_NAME = "booking-service"

CLEANING_GAP_MINUTES = int(os.getenv("CLEANING_GAP_MINUTES") or "30")
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE") or "50")

# expiry for a crashed holder; a live holder renews the lock every ttl/3
RESERVATION_LOCK_TTL_SECONDS = float(os.getenv("RESERVATION_LOCK_TTL_SECONDS") or "10")
RESERVATION_LOCK_WAIT_SECONDS = float(os.getenv("RESERVATION_LOCK_WAIT_SECONDS") or "5")

FULLY_BOOKED_DEFAULT_DAYS = 90
FULLY_BOOKED_MAX_DAYS = 366
