# cartstore/celery_worker.py
from celery import Celery
from kombu import Queue

from cartstore.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    SWEEP_INTERVAL_SECONDS,
)

EVENTS_QUEUE = "cart.events"

celery_app = Celery(
    "cartstore",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "cartstore.tasks.expire",
    "cartstore.services.event_publisher",
)

# zwykly `celery worker` bez -Q konsumuje wszystkie kolejki z task_queues
celery_app.conf.task_default_queue = "celery"
celery_app.conf.task_queues = (
    Queue("celery"),
    Queue(EVENTS_QUEUE),
)
celery_app.conf.task_routes = {
    "cartstore.services.event_publisher.handle_cart_event_task": {"queue": EVENTS_QUEUE},
}

# zdarzenia sa best-effort, martwy broker nie moze blokowac zapisu koszyka
celery_app.conf.task_publish_retry = False
celery_app.conf.broker_connection_timeout = 2

celery_app.conf.beat_schedule = {
    "sweep-expired-cart-items": {
        "task": "cartstore.tasks.expire.sweep_expired_items_task",
        "schedule": SWEEP_INTERVAL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
