##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
A thin wrapper around the redis-py client.

`RedisClient` gives the Redis-backed databases in this package one place to get a
connection from and one vocabulary of commands to speak. The underlying
`redis.Redis` instance is created lazily on first use, always with
`decode_responses=False` so that values can be read back as raw bytes; the
string-returning variants (`get`, `mget`, `hget`, ...) decode UTF-8 themselves.

Scans are exposed as generators that yield one SCAN/HSCAN batch at a time, so
tables can be walked without loading every key into memory.

Errors raised by redis-py are never caught here.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from redis import Redis
from redis.client import Pipeline

from redisdb.config import Config
from redisdb.backends.redis.redis_utils import table_pattern
from redisdb.config.connection import get_redis_options


LOG = logging.getLogger(__name__)

RedisValue = Union[bytes, str, int, float]


def _decode(value: Optional[bytes]) -> Optional[str]:
    if value is None:
        return None
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class RedisClient:
    """
    Wraps the redis-py client with a unified interface.

    Attributes:
        url (Optional[str]): The connection URL. If None, `redis_options` must describe the connection.
        redis_options (Dict): Extra keyword arguments for the redis-py client.
        connected (bool): Whether the underlying client has been created and not yet closed.

    Methods:
        from_config: Build a client from the redisdb configuration file.
        redis: Return the underlying redis-py client, creating it if needed.
        connect: Establish the connection.
        disconnect: Close the connection.
        ping: Send PING.
    """

    def __init__(self, url: Optional[str] = None, redis_options: Optional[Dict] = None):
        """
        Initialize the client. No connection is made until the first command.

        Args:
            url: A `redis://` or `rediss://` connection URL.
            redis_options: Extra keyword arguments for `redis.Redis`.
        """
        self.url: Optional[str] = url
        self.redis_options: Dict = {**(redis_options or {}), "decode_responses": False}
        self.connected: bool = False
        self._redis: Optional[Redis] = None

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "RedisClient":
        """
        Build a client from the `redis` section of the configuration.

        Args:
            config: The configuration to read. Defaults to the loaded configuration file.

        Returns:
            A new, not yet connected, `RedisClient`.
        """
        options = get_redis_options(config)
        url = options.pop("url")
        return cls(url=url, redis_options=options)

    def __enter__(self) -> "RedisClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()

    def redis(self) -> Redis:
        """
        Return the underlying redis-py client, creating it on first use.

        Returns:
            The redis-py client.
        """
        if self._redis is not None:
            return self._redis

        if self.url:
            redis = Redis.from_url(self.url, **self.redis_options)
        else:
            redis = Redis(**self.redis_options)

        self.connected = True
        self._redis = redis
        LOG.info("redis: created")
        return redis

    def connect(self):
        """
        Establish the connection if it isn't already established.
        """
        if not self.connected:
            self.redis().ping()
            self.connected = True

    def disconnect(self):
        """
        Close the connection. Does nothing if no connection was ever created.
        """
        if self._redis is None:
            return
        LOG.info("redis: quit...")
        self._redis.close()
        self._redis = None
        self.connected = False
        LOG.info("redis: quit")

    def ping(self):
        self.redis().ping()

    def get_version(self) -> str:
        """
        Query the server for its version.

        Returns:
            A string representing the current version of Redis.
        """
        return self.redis().info().get("redis_version", "N/A")

    def flush_database(self):
        """
        Remove everything stored in the current Redis database.
        """
        LOG.info("redis: flushdb...")
        self.redis().flushdb()

    ########################
    # Plain key commands
    ########################

    def delete(self, keys: List[str]) -> int:
        if not keys:
            return 0
        return self.redis().delete(*keys)

    def get(self, key: str) -> Optional[str]:
        return _decode(self.redis().get(key))

    def get_buffer(self, key: str) -> Optional[bytes]:
        return self.redis().get(key)

    def mget(self, keys: List[str]) -> List[Optional[str]]:
        return [_decode(v) for v in self.mget_buffer(keys)]

    def mget_buffer(self, keys: List[str]) -> List[Optional[bytes]]:
        if not keys:
            return []
        return self.redis().mget(keys)

    def set(self, key: str, value: RedisValue):
        self.redis().set(key, value)

    def set_with_ttl(self, key: str, value: RedisValue, expire_at: int):
        """
        SET `key` to `value`, expiring at the absolute unix timestamp `expire_at` (EXAT).
        """
        self.redis().set(key, value, exat=expire_at)

    def mset(self, mapping: Mapping[str, Union[str, int, float]]):
        if not mapping:
            return
        self.redis().mset(dict(mapping))

    def mset_buffer(self, mapping: Mapping[str, bytes]):
        if not mapping:
            return
        self.redis().mset(dict(mapping))

    def incr(self, key: str, by: int = 1) -> int:
        return self.redis().incrby(key, by)

    def incr_batch(self, increments: List[Tuple[str, int]]) -> List[Tuple[str, int]]:
        """
        INCRBY every key in one pipeline.

        Args:
            increments: `(key, by)` tuples.

        Returns:
            `(key, new_value)` tuples in the order of `increments`.
        """
        if not increments:
            return []
        pipeline = self.pipeline()
        for key, by in increments:
            pipeline.incrby(key, by)
        results = pipeline.execute()
        return [(key, int(value)) for (key, _), value in zip(increments, results)]

    def ttl(self, key: str) -> int:
        return self.redis().ttl(key)

    ########################
    # Hash commands
    ########################

    def hgetall(self, key: str) -> Optional[Dict[str, str]]:
        """
        HGETALL `key`, decoding fields and values.

        Returns:
            The hash as a dict, or None if the hash is empty or missing.
        """
        result = self.redis().hgetall(key)
        if not result:
            return None
        return {_decode(k): _decode(v) for k, v in result.items()}

    def hget(self, key: str, field: str) -> Optional[str]:
        return _decode(self.redis().hget(key, field))

    def hset(self, key: str, mapping: Mapping[str, RedisValue]):
        if not mapping:
            return
        self.redis().hset(key, mapping=dict(mapping))

    def hset_with_ttl(self, key: str, mapping: Mapping[str, RedisValue], expire_at: int):
        """
        HSET the fields of `mapping` and expire each of them at `expire_at` (HEXPIREAT).

        Field expiry requires Redis 7.4 or newer.
        """
        if not mapping:
            return
        fields = list(mapping.keys())
        redis = self.redis()
        redis.hset(key, mapping=dict(mapping))
        redis.execute_command("HEXPIREAT", key, expire_at, "FIELDS", len(fields), *fields)

    def hdel(self, key: str, fields: List[str]):
        if not fields:
            return
        self.redis().hdel(key, *fields)

    def hmget(self, key: str, fields: List[str]) -> List[Optional[str]]:
        return [_decode(v) for v in self.hmget_buffer(key, fields)]

    def hmget_buffer(self, key: str, fields: List[str]) -> List[Optional[bytes]]:
        if not fields:
            return []
        return self.redis().hmget(key, fields)

    def hincr(self, key: str, field: str, increment: int = 1) -> int:
        return self.redis().hincrby(key, field, increment)

    def hincr_batch(self, key: str, increments: List[Tuple[str, int]]) -> List[Tuple[str, int]]:
        """
        HINCRBY every field of the hash at `key` in one pipeline.

        Args:
            key: The hash key.
            increments: `(field, by)` tuples.

        Returns:
            `(field, new_value)` tuples in the order of `increments`.
        """
        if not increments:
            return []
        pipeline = self.pipeline()
        for field, by in increments:
            pipeline.hincrby(key, field, by)
        results = pipeline.execute()
        return [(field, int(value)) for (field, _), value in zip(increments, results)]

    ########################
    # Tables
    ########################

    def drop_table(self, table: str):
        """
        Delete every key under the `table:` prefix.

        Args:
            table: The table to drop.
        """
        count = self._delete_matching(table_pattern(table))
        LOG.info(f"redis: dropped table {table} ({count} keys)")

    def clear_all(self):
        """
        Delete every key in the database, one SCAN batch at a time.
        """
        LOG.info("redis: clearAll...")
        count = self._delete_matching("*")
        LOG.info(f"redis: clearAll removed {count} keys")

    def _delete_matching(self, match: str) -> int:
        count = 0
        with self.with_pipeline() as pipeline:
            for keys in self.scan_stream(match=match):
                pipeline.delete(*keys)
                count += len(keys)
        return count

    ########################
    # Scanning
    ########################

    def scan_stream(self, match: str, count: Optional[int] = None) -> Iterator[List[str]]:
        """
        Iterate over the keys matching `match`, one SCAN batch at a time.

        `count` is the SCAN batch size hint, not a limit.

        Args:
            match: A glob-style pattern.
            count: The SCAN COUNT hint.

        Yields:
            Non-empty lists of decoded keys.
        """
        redis = self.redis()
        cursor = 0
        while True:
            cursor, keys = redis.scan(cursor=cursor, match=match, count=count)
            if keys:
                yield [_decode(key) for key in keys]
            if int(cursor) == 0:
                break

    def scan_stream_flat(self, match: str, count: Optional[int] = None) -> Iterator[str]:
        """
        Like `scan_stream`, but yields individual keys.
        """
        for keys in self.scan_stream(match=match, count=count):
            yield from keys

    def scan_count(self, match: str, count: Optional[int] = None) -> int:
        """
        Count the keys matching `match` by walking a full SCAN.
        """
        return sum(len(keys) for keys in self.scan_stream(match=match, count=count))

    def hscan_stream(
        self, key: str, match: Optional[str] = None, count: Optional[int] = None
    ) -> Iterator[Dict[str, bytes]]:
        """
        Iterate over the fields of the hash at `key`, one HSCAN batch at a time.

        Args:
            key: The hash key.
            match: An optional glob-style pattern for field names.
            count: The HSCAN COUNT hint.

        Yields:
            Non-empty dicts mapping decoded field names to raw values.
        """
        redis = self.redis()
        cursor = 0
        while True:
            cursor, data = redis.hscan(key, cursor=cursor, match=match, count=count)
            if data:
                yield {_decode(field): value for field, value in data.items()}
            if int(cursor) == 0:
                break

    def hscan_count(self, key: str, match: Optional[str] = None) -> int:
        """
        Count the fields of the hash at `key` (optionally only those matching `match`).
        """
        return sum(len(batch) for batch in self.hscan_stream(key, match=match))

    ########################
    # Pipelines
    ########################

    def pipeline(self) -> Pipeline:
        """
        Create a non-transactional pipeline.
        """
        return self.redis().pipeline(transaction=False)

    @contextmanager
    def with_pipeline(self) -> Iterator[Pipeline]:
        """
        Context manager that yields a pipeline and executes it when the block exits
        normally. If the block raises, the queued commands are discarded.

        Yields:
            The pipeline to queue commands on.
        """
        pipeline = self.pipeline()
        try:
            yield pipeline
        except BaseException:
            pipeline.reset()
            raise
        pipeline.execute()
