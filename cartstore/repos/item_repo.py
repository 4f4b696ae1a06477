# cartstore/repos/item_repo.py
from datetime import datetime
from typing import Iterable, Iterator, List

import redis
from pydantic import ValidationError

from cartstore.data.keys import ITEM_KEY_PATTERN, item_key
from cartstore.domain.schemas import CartItem
from cartstore.domain.ttl_policy import duration_for, expiry_timestamp_for
from cartstore.utils.logging import get_logger
from cartstore.utils.retry import redis_retry

logger = get_logger(__name__)


class CartItemRepo:
    """
    Pojedyncze pozycje koszyka, klucz cart:user:{user_id}:item:{item_id}
    Indeksu tu nie dotykamy, to robi serwis.
    """

    def __init__(self, client: redis.Redis):
        self.redis = client

    def _decode(self, key: str, raw: str | None) -> CartItem | None:
        if raw is None:
            return None
        try:
            return CartItem.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Uszkodzona pozycja koszyka pod kluczem {key}: {e}")
            return None

    @redis_retry()
    def get_by_key(self, key: str) -> CartItem | None:
        return self._decode(key, self.redis.get(key))

    def get(self, user_id: int, item_id: str) -> CartItem | None:
        return self.get_by_key(item_key(user_id, item_id))

    @redis_retry()
    def get_many(self, keys: Iterable[str]) -> List[CartItem | None]:
        keys = list(keys)
        if not keys:
            return []
        #wszystkie GET w jednym round tripie, bez transakcji
        with self.redis.pipeline(transaction=False) as pipe:
            for key in keys:
                pipe.get(key)
            raw_values = pipe.execute()
        return [self._decode(k, raw) for k, raw in zip(keys, raw_values)]

    def put(self, item: CartItem, now: datetime) -> CartItem:
        #expires_at zawsze liczone z tier, nigdy z wartosci od wolajacego
        item.expires_at = expiry_timestamp_for(item.tier, now)
        # SET bez ex czysci poprzedni TTL, wiec PaymentCompleted zostaje na stale
        self.redis.set(item.key, item.model_dump_json(), ex=duration_for(item.tier))
        return item

    def delete(self, user_id: int, item_id: str) -> bool:
        return self.redis.delete(item_key(user_id, item_id)) > 0

    def delete_many(self, keys: Iterable[str]) -> int:
        keys = list(keys)
        if not keys:
            return 0
        return self.redis.delete(*keys)

    @redis_retry()
    def scan_keys(self) -> List[str]:
        return list(self.redis.scan_iter(match=ITEM_KEY_PATTERN, count=500))

    def iter_items(self) -> Iterator[CartItem]:
        for key in self.scan_keys():
            item = self.get_by_key(key)
            if item is not None:
                yield item
