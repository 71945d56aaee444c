"""
Fixtures for the `redis_client.py` module and the databases built on top of it.
"""
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture
from redis import Redis

from redisdb.backends.redis.redis_client import RedisClient
from tests.fixture_types import FixtureList, FixtureStr


@pytest.fixture
def redis_connection_string() -> FixtureStr:
    """
    Fixture to provide a mock Redis connection string.

    Returns:
        A mock Redis connection string.
    """
    return "redis://localhost:6379/0"


@pytest.fixture
def mock_redis(mocker: MockerFixture) -> MagicMock:
    """
    Mocks the redis-py client.

    The pipeline returned by `mock_redis.pipeline()` is a separate mock so tests can
    inspect the commands queued on it and set what `execute()` returns.

    Args:
        mocker (MockerFixture): Used to create a mock Redis client.

    Returns:
        A mocked redis-py client.
    """
    redis = mocker.MagicMock(spec=Redis)
    redis.pipeline.return_value = mocker.MagicMock(name="pipeline")
    return redis


@pytest.fixture
def redis_client(mocker: MockerFixture, redis_connection_string: FixtureStr, mock_redis: MagicMock) -> RedisClient:
    """
    A `RedisClient` whose lazily created redis-py client is `mock_redis`.

    Args:
        mocker (MockerFixture): Used to patch `Redis.from_url`.
        redis_connection_string (FixtureStr): The URL the client is built with.
        mock_redis (MagicMock): The mocked redis-py client.

    Returns:
        A `RedisClient` that never talks to a real server.
    """
    mocker.patch("redisdb.backends.redis.redis_client.Redis.from_url", return_value=mock_redis)
    return RedisClient(url=redis_connection_string)


@pytest.fixture
def mock_redis_client(mocker: MockerFixture) -> MagicMock:
    """
    A mocked `RedisClient`, for testing the databases without going through redis-py.

    Args:
        mocker (MockerFixture): Used to create the mock.

    Returns:
        A `MagicMock` with the `RedisClient` interface.
    """
    return mocker.MagicMock(spec=RedisClient)


@pytest.fixture
def sample_rows() -> FixtureList:
    """
    A handful of records used by the query and `RedisDB` tests.

    Returns:
        A list of record dictionaries.
    """
    return [
        {"id": "u1", "name": "ada", "age": 36, "tags": ["admin", "dev"]},
        {"id": "u2", "name": "bob", "age": 17, "tags": ["dev"]},
        {"id": "u3", "name": "cy", "age": 52},
        {"id": "u4", "name": "dee", "age": None, "tags": []},
    ]
