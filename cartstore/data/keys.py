# cartstore/data/keys.py
#cart:user:{user_id}              -> set kluczy pozycji (indeks)
#cart:user:{user_id}:item:{id}    -> JSON pozycji

INDEX_KEY_PATTERN = "cart:user:*"
ITEM_KEY_PATTERN = "cart:user:*:item:*"


def index_key(user_id: int) -> str:
    return f"cart:user:{user_id}"


def item_key(user_id: int, item_id: str) -> str:
    return f"{index_key(user_id)}:item:{item_id}"


def is_item_key(key: str) -> bool:
    return ":item:" in key
