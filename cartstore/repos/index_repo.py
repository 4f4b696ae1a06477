# cartstore/repos/index_repo.py
from datetime import timedelta
from typing import List, Set

import redis

from cartstore.data.keys import INDEX_KEY_PATTERN, index_key, is_item_key
from cartstore.domain.schemas import CartTier
from cartstore.domain.ttl_policy import duration_for
from cartstore.utils.retry import redis_retry

#odpowiedzi TTL z redisa
_KEY_MISSING = -2
_NO_EXPIRY = -1


class CartIndexRepo:
    """
    Indeks koszyka: set kluczy pozycji pod cart:user:{user_id}
    Spojnosc z pozycjami jest best-effort, odczyt pomija wiszace wpisy.
    """

    def __init__(self, client: redis.Redis):
        self.redis = client

    def add(self, user_id: int, key: str, tier: CartTier = CartTier.DEFAULT) -> None:
        ikey = index_key(user_id)
        remaining = self.redis.ttl(ikey)
        self.redis.sadd(ikey, key)

        duration = duration_for(tier)
        if duration is None:
            self.redis.persist(ikey)
            return

        if remaining == _NO_EXPIRY:
            #indeks bez wygasania (PaymentCompleted), nie skracamy
            return

        #nowy indeks dostaje TTL tieru, istniejacy tylko przedluzamy
        if remaining == _KEY_MISSING or remaining < duration.total_seconds():
            self.redis.expire(ikey, duration)

    def remove(self, user_id: int, key: str) -> None:
        self.redis.srem(index_key(user_id), key)

    @redis_retry()
    def members(self, user_id: int) -> Set[str]:
        return self.redis.smembers(index_key(user_id))

    def clear(self, user_id: int) -> None:
        self.redis.delete(index_key(user_id))

    def set_expiry(self, user_id: int, duration: timedelta | None) -> None:
        ikey = index_key(user_id)
        if duration is None:
            #"nigdy" = zdjecie TTL, a nie data w dalekiej przyszlosci
            self.redis.persist(ikey)
        else:
            self.redis.expire(ikey, duration)

    @redis_retry()
    def scan_keys(self) -> List[str]:
        return [
            k for k in self.redis.scan_iter(match=INDEX_KEY_PATTERN, count=500)
            if not is_item_key(k)
        ]
