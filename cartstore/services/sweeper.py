# cartstore/services/sweeper.py
from typing import List

from redis.exceptions import RedisError

from cartstore.domain.errors import BackendUnavailable
from cartstore.domain.schemas import CartItem
from cartstore.services.cart_service import CartService
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)


class ExpirySweeper:
    """
    Usuwanie wygaslych pozycji poza sciezka requestu.
    Skanuje WSZYSTKIE klucze pozycji - O(n), uruchamiane z celery beat, nie per request.
    """

    def __init__(self, cart_service: CartService):
        self.cart_service = cart_service

    def find_expired(self) -> List[CartItem]:
        now = self.cart_service.clock()
        try:
            return [i for i in self.cart_service.item_repo.iter_items() if i.expires_at <= now]
        except RedisError as e:
            logger.error(f"Error scanning for expired cart items: {e}")
            raise BackendUnavailable("Nie mozna przeskanowac pozycji koszykow") from e

    def sweep(self) -> int:
        expired = self.find_expired()
        if not expired:
            return 0

        removed = 0
        #ta sama sciezka co API, zeby indeks i zdarzenia zostaly spojne
        for item in expired:
            try:
                if self.cart_service.remove_item(item.user_id, item.item_id):
                    removed += 1
            except BackendUnavailable as e:
                logger.warning(f"Failed to remove expired item {item.item_id}: {e}")

        logger.info(f"Removed {removed} expired cart items")
        return removed
