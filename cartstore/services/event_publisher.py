# cartstore/services/event_publisher.py
from datetime import datetime, timezone
from typing import Any, Dict

from cartstore.celery_worker import celery_app
from cartstore.domain.schemas import CartEvent
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)

ITEM_ADDED = "cart.item.added"
ITEM_UPDATED = "cart.item.updated"
ITEM_REMOVED = "cart.item.removed"
CART_CLEARED = "cart.cleared"
TIER_CHANGED = "cart.tier.changed"


class EventPublisher:
    """
    Publikacja zdarzen koszyka przez Celery (kolejka cart.events).
    Fire-and-forget: bledy brokera sa logowane i polykane,
    nigdy nie wywracaja operacji na koszyku.
    """

    def publish(self, event_type: str, payload: Dict[str, Any]) -> bool:
        event = CartEvent(
            event_type=event_type,
            timestamp=datetime.now(timezone.utc),
            payload=payload,
        )
        try:
            handle_cart_event_task.delay(event.model_dump(mode="json"))
        except Exception as e:
            logger.error(f"Failed to publish cart event {event_type}: {e}")
            return False

        logger.info(f"Published cart event: {event_type}")
        return True


@celery_app.task(name="cartstore.services.event_publisher.handle_cart_event_task")
def handle_cart_event_task(event: Dict[str, Any]):
    """
    Konsument zdarzen - tu podpinaja sie uslugi zainteresowane koszykiem.
    Na razie tylko loguje.
    """
    logger.info(
        f"[CART EVENT] {event.get('event_type')} at {event.get('timestamp')}: {event.get('payload')}"
    )
    return event
