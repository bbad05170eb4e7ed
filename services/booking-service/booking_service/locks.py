import asyncio
import time
import uuid
from contextlib import asynccontextmanager

from .config import RESERVATION_LOCK_TTL_SECONDS, RESERVATION_LOCK_WAIT_SECONDS
from .redis_client import redis_client

POLL_SECONDS = 0.05


class ReservationLockTimeout(Exception):
    pass


def lock_key(service_type: str, venue: str, booking_date) -> str:
    return f"booking_lock:{service_type}:{venue}:{booking_date}"


async def _keep_alive(key: str, token: str, ttl_ms: int):
    # push the expiry out while the holder is still inside its transaction
    while True:
        await asyncio.sleep(ttl_ms / 3000)
        if await redis_client.get(key) != token:
            return
        await redis_client.pexpire(key, ttl_ms)


@asynccontextmanager
async def reservation_lock(
    key: str,
    ttl_seconds: float = RESERVATION_LOCK_TTL_SECONDS,
    wait_seconds: float = RESERVATION_LOCK_WAIT_SECONDS,
):
    """
    Per (service, venue, date) mutex shared by every service instance.
    Renewed while held; the TTL only matters when the holder dies.
    """
    token = str(uuid.uuid4())
    ttl_ms = int(ttl_seconds * 1000)
    deadline = time.monotonic() + wait_seconds

    while not await redis_client.set(key, token, nx=True, px=ttl_ms):
        if time.monotonic() >= deadline:
            raise ReservationLockTimeout(f"Could not acquire {key}")
        await asyncio.sleep(POLL_SECONDS)

    renewer = asyncio.create_task(_keep_alive(key, token, ttl_ms))
    try:
        yield token
    finally:
        renewer.cancel()
        try:
            await renewer
        except asyncio.CancelledError:
            pass
        # only release our own lock; it may have expired and been re-taken
        if await redis_client.get(key) == token:
            await redis_client.delete(key)
