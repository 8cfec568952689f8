from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from shortlinker.types import LambdaContext, LambdaConfiguration
from shortlinker.dao.memory import InMemoryStore, ShortlinkMemoryDAO, URLHashMemoryDAO
from shortlinker.utils import helpers


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Run handlers as deployed, so unexpected errors become 500 responses."""
    monkeypatch.setattr(helpers, 'running_locally', lambda: False)
    monkeypatch.setenv('APP_NAME', 'testapp')
    monkeypatch.setenv('APP_ENV', 'test')


@pytest.fixture
def context() -> LambdaContext:
    ctx = MagicMock()
    ctx.function_name = 'shortlinker'
    ctx.get_remaining_time_in_millis.return_value = 3000
    return cast(LambdaContext, ctx)


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def shortlink_dao(store: InMemoryStore) -> ShortlinkMemoryDAO:
    dao = ShortlinkMemoryDAO(store, prefix='testapp:test')
    # read by the shorten handler as URLHashRedisDAO(redis_client=shortlink_dao.redis)
    dao.redis = store
    return dao


@pytest.fixture
def url_hash_dao(store: InMemoryStore) -> URLHashMemoryDAO:
    return URLHashMemoryDAO(store, prefix='testapp:test')
