# cartstore/data/database.py
from functools import lru_cache

import redis

from cartstore.utils.settings import REDIS_URL


@lru_cache(maxsize=1)
def get_redis_client() -> redis.Redis:
    #jeden pool polaczen na proces
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def get_redis():
    """Dependency dla FastAPI."""
    return get_redis_client()
