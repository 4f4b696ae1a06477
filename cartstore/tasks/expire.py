# cartstore/tasks/expire.py
from cartstore.celery_worker import celery_app
from cartstore.data.database import get_redis_client
from cartstore.services.cart_service import create_cart_service
from cartstore.services.sweeper import ExpirySweeper
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="cartstore.tasks.expire.sweep_expired_items_task")
def sweep_expired_items_task():
    logger.info("Sweep expired cart items task started")

    sweeper = ExpirySweeper(create_cart_service(get_redis_client()))
    removed = sweeper.sweep()

    logger.info(f"Sweep finished, removed {removed} items")
    return {"removed": removed}
