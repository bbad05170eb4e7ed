from sqlalchemy.ext.asyncio import AsyncSession

from .logs import log
from .rabbitmq import publisher
from .redis_client import redis_client
from .store import STATUS_PAID, STATUS_PENDING, update_payment_status

PAYMENT_SUCCEEDED = "payment.succeeded"
PAYMENT_FAILED = "payment.failed"

IDEMPOTENCY_TTL_SECONDS = 60 * 60 * 24


def processed_key(event_id: str) -> str:
    return f"processed_event:{event_id}"


async def already_processed(event_id: str) -> bool:
    # SET NX so two consumers racing on a redelivery agree on one winner
    fresh = await redis_client.set(processed_key(event_id), "1", nx=True, ex=IDEMPOTENCY_TTL_SECONDS)
    return not fresh


async def apply_payment_event(db: AsyncSession, payload: dict) -> bool:
    """
    Promote a booking after the payment provider reports back.
    A failed charge keeps the booking PENDING so the customer can retry;
    it keeps blocking its slot either way.
    Returns True when a booking was updated.
    """
    event_id = payload.get("event_id")
    event_type = payload.get("event_type")
    data = payload.get("data") or {}
    booking_id = data.get("booking_id")

    if not event_id or event_type not in (PAYMENT_SUCCEEDED, PAYMENT_FAILED) or not booking_id:
        log("WARN", "Ignoring payment event", event_id=event_id, event_type=event_type)
        return False

    if await already_processed(event_id):
        return False

    if event_type == PAYMENT_SUCCEEDED:
        status, payment_status = STATUS_PAID, "succeeded"
    else:
        status, payment_status = STATUS_PENDING, "failed"

    booking = await update_payment_status(
        db,
        booking_id,
        data.get("payment_intent_id"),
        payment_status=payment_status,
        status=status,
    )
    if not booking:
        log("WARN", "Payment event for unknown booking", booking_id=booking_id, event_type=event_type)
        return False

    log("INFO", "Booking payment updated", booking_id=booking_id, status=status, payment_status=payment_status)

    if status == STATUS_PAID:
        await publisher.publish_event(
            "booking.paid",
            {
                "booking_id": booking.booking_id,
                "service_type": booking.service_type,
                "booking_date": booking.booking_date.isoformat(),
                "time_slot": booking.time_slot,
            },
        )
    return True
