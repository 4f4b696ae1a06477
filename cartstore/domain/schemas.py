# cartstore/domain/schemas.py
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from cartstore.data.keys import item_key


class CartTier(str, Enum):
    """Etap lejka zakupowego, od niego zalezy TTL pozycji koszyka."""

    DEFAULT = "Default"
    ORDER_PLACED = "OrderPlaced"
    PAYMENT_COMPLETED = "PaymentCompleted"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


#jawny porzadek, nie kolejnosc deklaracji
_TIER_RANK = {
    CartTier.DEFAULT: 0,
    CartTier.ORDER_PLACED: 1,
    CartTier.PAYMENT_COMPLETED: 2,
}


def highest_tier(tiers) -> CartTier:
    return max(tiers, key=lambda t: t.rank, default=CartTier.DEFAULT)


class CartItem(BaseModel):
    """Pozycja koszyka zapisywana w redisie jako JSON."""

    item_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_id: int
    product_id: int
    quantity: int
    unit_price: Decimal

    # snapshot produktu z momentu dodania, nigdy nie odswiezany
    name: str | None = None
    description: str | None = None
    image_url: str | None = None

    created_at: datetime
    updated_at: datetime
    expires_at: datetime
    tier: CartTier = CartTier.DEFAULT

    @property
    def key(self) -> str:
        return item_key(self.user_id, self.item_id)


class Cart(BaseModel):
    """Widok koszyka skladany przy kazdym odczycie, nie jest zapisywany."""

    user_id: int
    items: List[CartItem] = Field(default_factory=list)
    total_amount: Decimal = Decimal("0.00")
    total_items: int = 0
    tier: CartTier = CartTier.DEFAULT


class AddItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    user_id: int = Field(..., gt=0, description="ID uzytkownika (musi byc > 0)")
    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")
    unit_price: Decimal = Field(..., ge=0, description="Cena jednostkowa (>= 0)")
    name: str | None = Field(None, max_length=200)
    description: str | None = None
    image_url: str | None = None


class UpdateItemIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilosc (musi byc > 0)")


class SetTierIn(BaseModel):
    tier: CartTier


class SuccessOut(BaseModel):
    success: bool


class SweepOut(BaseModel):
    removed: int


class StatisticsOut(BaseModel):
    total_carts: int
    total_items: int
    per_tier_counts: Dict[CartTier, int]


class CartEvent(BaseModel):
    """Koperta zdarzenia wysylana na szyne (fire-and-forget)."""

    event_type: str
    timestamp: datetime
    payload: Dict[str, Any]
