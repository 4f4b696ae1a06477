# cartstore/domain/ttl_policy.py
"""
Polityka TTL dla poziomow koszyka.

Default          -> 24h
OrderPlaced      -> 7 dni
PaymentCompleted -> bez wygasania

Czysta funkcja, bez efektow ubocznych.
"""
from datetime import datetime, timedelta, timezone

from cartstore.domain.schemas import CartTier
from cartstore.utils.settings import CART_DEFAULT_TTL_SECONDS, CART_ORDER_PLACED_TTL_SECONDS

#znacznik "nigdy" zamiast arytmetyki na dacie
NEVER_EXPIRES = datetime.max.replace(tzinfo=timezone.utc)

_DURATIONS = {
    CartTier.DEFAULT: timedelta(seconds=CART_DEFAULT_TTL_SECONDS),
    CartTier.ORDER_PLACED: timedelta(seconds=CART_ORDER_PLACED_TTL_SECONDS),
    CartTier.PAYMENT_COMPLETED: None,
}


def duration_for(tier: CartTier) -> timedelta | None:
    """None oznacza brak wygasania klucza."""
    return _DURATIONS[tier]


def expiry_timestamp_for(tier: CartTier, now: datetime) -> datetime:
    duration = duration_for(tier)
    if duration is None:
        return NEVER_EXPIRES
    return now + duration
