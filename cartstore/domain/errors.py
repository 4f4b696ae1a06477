# cartstore/domain/errors.py


class CartError(Exception):
    """Bazowy wyjatek domeny koszyka."""


class CartItemNotFound(CartError, LookupError):
    def __init__(self, user_id: int, item_id: str):
        super().__init__(f"Pozycja {item_id} nie istnieje w koszyku uzytkownika {user_id}")
        self.user_id = user_id
        self.item_id = item_id


class CartValidationError(CartError, ValueError):
    pass


class BackendUnavailable(CartError):
    """Redis nie odpowiada, zapis nie mogl zostac wykonany."""
