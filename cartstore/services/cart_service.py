# cartstore/services/cart_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable

import redis
from redis.exceptions import RedisError

from cartstore.data.keys import item_key
from cartstore.domain.errors import BackendUnavailable, CartItemNotFound, CartValidationError
from cartstore.domain.schemas import Cart, CartItem, CartTier, highest_tier
from cartstore.domain.ttl_policy import duration_for, expiry_timestamp_for
from cartstore.repos.index_repo import CartIndexRepo
from cartstore.repos.item_repo import CartItemRepo
from cartstore.services import event_publisher as events
from cartstore.services.event_publisher import EventPublisher
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CartService:
    """
    Prosta implementacja cqrs dla koszyka w redisie
    commands (add, update, remove, clear, set_tier) modyfikuja pozycje + indeks, potem publikuja zdarzenie
    query (get_cart, get_statistics) tylko odczyt

    Pozycja i indeks to dwa klucze bez transakcji, okno niespojnosci jest akceptowane,
    get_cart pomija wiszace i wygasle wpisy.
    """

    def __init__(
        self,
        item_repo: CartItemRepo,
        index_repo: CartIndexRepo,
        publisher: EventPublisher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.item_repo = item_repo
        self.index_repo = index_repo
        self.publisher = publisher
        self.clock = clock

    #query - odczyt
    def get_cart(self, user_id: int) -> Cart:
        try:
            return self._load_cart(user_id)
        except RedisError as e:
            #dostepnosc ponad poprawnosc: pusty koszyk zamiast bledu
            logger.error(f"Error getting cart for user {user_id}: {e}")
            return Cart(user_id=user_id)

    def _load_cart(self, user_id: int) -> Cart:
        """Jak get_cart, ale RedisError leci dalej (dla sciezek zapisu)."""
        keys = self.index_repo.members(user_id)
        if not keys:
            return Cart(user_id=user_id)
        stored = self.item_repo.get_many(keys)

        now = self.clock()
        items = [i for i in stored if i is not None and i.expires_at > now]
        return self._build_cart(user_id, items)

    @staticmethod
    def _build_cart(user_id: int, items: list[CartItem]) -> Cart:
        return Cart(
            user_id=user_id,
            items=items,
            total_amount=sum((i.unit_price * i.quantity for i in items), Decimal("0.00")),
            total_items=sum(i.quantity for i in items),
            tier=highest_tier(i.tier for i in items),
        )

    def get_statistics(self) -> Dict[str, Any]:
        try:
            total_carts = len(self.index_repo.scan_keys())
            per_tier = {tier: 0 for tier in CartTier}
            total_items = 0
            for item in self.item_repo.iter_items():
                per_tier[item.tier] += 1
                total_items += 1
        except RedisError as e:
            logger.error(f"Error getting cart statistics: {e}")
            raise BackendUnavailable("Nie mozna pobrac statystyk koszykow") from e

        return {
            "total_carts": total_carts,
            "total_items": total_items,
            "per_tier_counts": per_tier,
        }

    #commands
    @staticmethod
    def _validate_quantity(quantity: int):
        if quantity <= 0:
            raise CartValidationError("Ilosc musi byc wieksza niz 0")

    def add_item(
        self,
        user_id: int,
        product_id: int,
        quantity: int,
        unit_price: Decimal,
        name: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> CartItem:
        self._validate_quantity(quantity)
        if unit_price < 0:
            raise CartValidationError("Cena nie moze byc ujemna")

        # dwa rownolegle add_item dla tego samego produktu moga oba nie zobaczyc
        # istniejacej pozycji i zapisac dwie osobne linie, brak CAS w tym wzorcu
        cart = self.get_cart(user_id)
        existing = next((i for i in cart.items if i.product_id == product_id), None)
        now = self.clock()

        try:
            if existing:
                logger.info(
                    f"Produkt {product_id} juz jest w koszyku, zwiekszam ilosc "
                    f"z {existing.quantity} do {existing.quantity + quantity}"
                )
                existing.quantity += quantity
                existing.updated_at = now
                item = self.item_repo.put(existing, now)
                # SADD jest idempotentny, add tylko przedluza TTL indeksu do TTL pozycji
                self.index_repo.add(user_id, item.key, item.tier)
                event_type = events.ITEM_UPDATED
            else:
                item = CartItem(
                    user_id=user_id,
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    name=name,
                    description=description,
                    image_url=image_url,
                    created_at=now,
                    updated_at=now,
                    expires_at=expiry_timestamp_for(CartTier.DEFAULT, now),
                    tier=CartTier.DEFAULT,
                )
                self.item_repo.put(item, now)
                self.index_repo.add(user_id, item.key, item.tier)
                event_type = events.ITEM_ADDED
                logger.info(f"Added item {item.item_id} to cart for user {user_id}")
        except RedisError as e:
            logger.error(f"Error adding item to cart for user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna zapisac koszyka uzytkownika {user_id}") from e

        self.publisher.publish(event_type, item.model_dump(mode="json"))
        return item

    def update_item(self, user_id: int, item_id: str, quantity: int) -> CartItem:
        self._validate_quantity(quantity)

        try:
            item = self.item_repo.get(user_id, item_id)
            if item is None:
                raise CartItemNotFound(user_id, item_id)

            now = self.clock()
            item.quantity = quantity
            item.updated_at = now
            self.item_repo.put(item, now)
            self.index_repo.add(user_id, item.key, item.tier)
        except RedisError as e:
            logger.error(f"Error updating cart item {item_id} for user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna zapisac pozycji {item_id}") from e

        logger.info(f"Updated cart item {item_id} for user {user_id}")
        self.publisher.publish(events.ITEM_UPDATED, item.model_dump(mode="json"))
        return item

    def remove_item(self, user_id: int, item_id: str) -> bool:
        try:
            #odczyt przed usunieciem, na potrzeby zdarzenia
            item = self.item_repo.get(user_id, item_id)
            self.index_repo.remove(user_id, item_key(user_id, item_id))
            deleted = self.item_repo.delete(user_id, item_id)
        except RedisError as e:
            logger.error(f"Error removing cart item {item_id} for user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna usunac pozycji {item_id}") from e

        if deleted:
            payload = (
                item.model_dump(mode="json")
                if item is not None
                else {"user_id": user_id, "item_id": item_id}
            )
            self.publisher.publish(events.ITEM_REMOVED, payload)
            logger.info(f"Removed cart item {item_id} for user {user_id}")

        return deleted

    def clear_cart(self, user_id: int) -> bool:
        try:
            keys = self.index_repo.members(user_id)
            if not keys:
                return True

            #wszystkie pozycje jednym DEL, potem indeks
            removed = self.item_repo.delete_many(keys)
            self.index_repo.clear(user_id)
        except RedisError as e:
            logger.error(f"Error clearing cart for user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna wyczyscic koszyka uzytkownika {user_id}") from e

        self.publisher.publish(events.CART_CLEARED, {"user_id": user_id, "removed": removed})
        logger.info(f"Cleared cart for user {user_id}")
        return True

    def set_tier(self, user_id: int, tier: CartTier) -> bool:
        try:
            cart = self._load_cart(user_id)
        except RedisError as e:
            #awaria redisa to nie jest pusty koszyk
            logger.error(f"Error reading cart for tier change, user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna odczytac koszyka uzytkownika {user_id}") from e

        if not cart.items:
            return False

        now = self.clock()
        try:
            self._rewrite_items(cart.items, tier, now)
            self.index_repo.set_expiry(user_id, duration_for(tier))
        except RedisError as e:
            logger.error(f"Error updating cart tier for user {user_id}: {e}")
            raise BackendUnavailable(f"Nie mozna zmienic poziomu koszyka uzytkownika {user_id}") from e

        self.publisher.publish(
            events.TIER_CHANGED,
            {"user_id": user_id, "previous_tier": cart.tier.value, "tier": tier.value},
        )
        logger.info(f"Updated cart tier to {tier.value} for user {user_id}")
        return True

    def _rewrite_items(self, items: Iterable[CartItem], tier: CartTier, now: datetime):
        for item in items:
            item.tier = tier
            item.updated_at = now
            self.item_repo.put(item, now)


def create_cart_service(client: redis.Redis, publisher: EventPublisher | None = None) -> CartService:
    return CartService(
        item_repo=CartItemRepo(client),
        index_repo=CartIndexRepo(client),
        publisher=publisher or EventPublisher(),
    )
