import asyncio

import pytest

from booking_service.locks import ReservationLockTimeout, lock_key, reservation_lock


def test_lock_key():
    assert lock_key("spa", "main", "2025-06-14") == "booking_lock:spa:main:2025-06-14"


async def test_lock_is_exclusive(fake_redis):
    key = lock_key("spa", "main", "2025-06-14")
    async with reservation_lock(key) as token:
        assert await fake_redis.get(key) == token
        with pytest.raises(ReservationLockTimeout):
            async with reservation_lock(key, wait_seconds=0.1):
                pass
    assert await fake_redis.get(key) is None


async def test_lock_does_not_release_someone_elses_token(fake_redis):
    key = lock_key("cinema", "main", "2025-06-14")
    async with reservation_lock(key):
        await fake_redis.set(key, "other-holder")
    assert await fake_redis.get(key) == "other-holder"


async def test_lock_released_on_error(fake_redis):
    key = lock_key("spa", "main", "2025-06-15")
    with pytest.raises(RuntimeError):
        async with reservation_lock(key):
            raise RuntimeError("boom")
    assert await fake_redis.get(key) is None


async def test_lock_is_renewed_while_held(fake_redis):
    key = lock_key("spa", "main", "2025-06-16")
    async with reservation_lock(key, ttl_seconds=0.3) as token:
        await asyncio.sleep(0.8)
        # still ours well past the original ttl
        assert await fake_redis.get(key) == token
        with pytest.raises(ReservationLockTimeout):
            async with reservation_lock(key, wait_seconds=0.1):
                pass
    assert await fake_redis.get(key) is None
