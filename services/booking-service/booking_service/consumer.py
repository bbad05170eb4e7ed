import json
import aio_pika

from .db import SessionLocal
from .logs import log
from .payments import PAYMENT_FAILED, PAYMENT_SUCCEEDED, apply_payment_event
from .rabbitmq import EXCHANGE_NAME

QUEUE_NAME = "booking_service_payment_events"
ROUTING_KEYS = [PAYMENT_SUCCEEDED, PAYMENT_FAILED]


async def handle_message(message: aio_pika.IncomingMessage):
    async with message.process(requeue=False):
        try:
            payload = json.loads(message.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            log("WARN", "Dropping malformed payment message")
            return

        async with SessionLocal() as db:
            await apply_payment_event(db, payload)


async def start_consumer(rabbit_url: str):
    conn = await aio_pika.connect_robust(rabbit_url)
    channel = await conn.channel()
    await channel.set_qos(prefetch_count=50)

    exchange = await channel.declare_exchange(
        EXCHANGE_NAME, aio_pika.ExchangeType.TOPIC, durable=True
    )

    queue = await channel.declare_queue(QUEUE_NAME, durable=True)
    for rk in ROUTING_KEYS:
        await queue.bind(exchange, routing_key=rk)

    await queue.consume(handle_message)
    log("INFO", "Payment consumer started")
    return conn
