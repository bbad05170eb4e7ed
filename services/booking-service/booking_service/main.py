from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from booking_core import SlotNoLongerAvailable
from booking_core.reservation import SLOT_CONFLICT

from .config import RABBIT_URL, RATE_LIMIT_PER_MINUTE, SERVICE_NAME
from .consumer import start_consumer
from .logs import log
from .middleware import RateLimitMiddleware, RequestLoggingMiddleware
from .rabbitmq import publisher
from .routes import router

app = FastAPI(title="Booking Service")
app.include_router(router)

app.add_middleware(RateLimitMiddleware, max_per_minute=RATE_LIMIT_PER_MINUTE)
app.add_middleware(RequestLoggingMiddleware)

_consumer_conn = None


@app.exception_handler(SlotNoLongerAvailable)
async def slot_taken_handler(request: Request, exc: SlotNoLongerAvailable):
    # retryable: the client refreshes availability and lets the user pick again
    return JSONResponse(
        status_code=409,
        content={
            "detail": "Time slot is no longer available. Please choose another time.",
            "reason": SLOT_CONFLICT,
            "time_slot": exc.slot_label,
            "booking_date": exc.booking_date,
        },
    )


@app.get("/health")
async def health():
    return {"status": "ok", "service": SERVICE_NAME, "events_enabled": publisher.enabled}


@app.on_event("startup")
async def startup():
    global _consumer_conn
    try:
        await publisher.connect()
    except Exception as e:
        log("WARN", "RabbitMQ connect failed at startup; continuing without events", error=str(e))

    # payment consumer is optional; availability and booking still work without it
    try:
        if RABBIT_URL:
            _consumer_conn = await start_consumer(RABBIT_URL)
    except Exception as e:
        _consumer_conn = None
        log("ERROR", "Payment consumer failed to start", error=str(e))


@app.on_event("shutdown")
async def shutdown():
    global _consumer_conn
    try:
        await publisher.close()
    except Exception as e:
        log("WARN", "Publisher close failed", error=str(e))
    try:
        if _consumer_conn and not _consumer_conn.is_closed:
            await _consumer_conn.close()
    except Exception as e:
        log("WARN", "Consumer close failed", error=str(e))
