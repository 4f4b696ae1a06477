"""Pytest configuration and fixtures"""
import os
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import fakeredis
import pytest

# Set test environment variables
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("REDIS_READ_RETRY_ATTEMPTS", "1")

from cartstore.repos.index_repo import CartIndexRepo  # noqa: E402
from cartstore.repos.item_repo import CartItemRepo  # noqa: E402
from cartstore.services.cart_service import CartService  # noqa: E402
from cartstore.services.event_publisher import EventPublisher  # noqa: E402
from cartstore.services.sweeper import ExpirySweeper  # noqa: E402

T0 = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Controllable clock injected into CartService."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock(T0)


@pytest.fixture
def redis_client():
    """In-memory redis; FakeRedis instances share one server, so flush around each test."""
    client = fakeredis.FakeRedis(decode_responses=True)
    client.flushall()
    yield client
    client.flushall()


@pytest.fixture
def item_repo(redis_client):
    return CartItemRepo(redis_client)


@pytest.fixture
def index_repo(redis_client):
    return CartIndexRepo(redis_client)


@pytest.fixture
def publisher():
    return Mock(spec=EventPublisher)


@pytest.fixture
def service(item_repo, index_repo, publisher, clock):
    return CartService(item_repo, index_repo, publisher, clock=clock)


@pytest.fixture
def sweeper(service):
    return ExpirySweeper(service)


def published_types(publisher) -> list:
    return [c.args[0] for c in publisher.publish.call_args_list]
