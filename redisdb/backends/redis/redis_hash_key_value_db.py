##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Key-value database backed by Redis hashes.

Each table is a single Redis hash whose key is the table name; every entry is a
field of that hash. Dropping or counting a table is therefore a single-key
operation. Per-entry expiry relies on HEXPIREAT, which only exists in Redis 7.4
and newer; on older servers use `RedisKeyValueDB` when entries need a TTL.
"""

import logging
from typing import Iterator, List, Optional

from redisdb.backends.common_key_value_db import CommonKeyValueDB, IncrementTuple, KeyValueDBTuple
from redisdb.backends.redis.redis_client import RedisClient
from redisdb.utils import take


LOG = logging.getLogger(__name__)


class RedisHashKeyValueDB(CommonKeyValueDB):
    """
    A `CommonKeyValueDB` that stores each table as one Redis hash.

    Attributes:
        client (RedisClient): The client used for all Redis commands.
    """

    def __init__(self, client: Optional[RedisClient] = None):
        """
        Initialize the database.

        Args:
            client: The Redis client to use. Defaults to one built from the configuration file.
        """
        self.client: RedisClient = client if client is not None else RedisClient.from_config()

    def ping(self):
        self.client.ping()

    def close(self):
        self.client.disconnect()

    def create_table(self, table: str, drop_if_exists: bool = False):
        if not drop_if_exists:
            return
        self.client.delete([table])

    def get_by_ids(self, table: str, ids: List[str]) -> List[KeyValueDBTuple]:
        if not ids:
            return []
        values = self.client.hmget_buffer(table, ids)
        return [(entity_id, value) for entity_id, value in zip(ids, values) if value is not None]

    def delete_by_ids(self, table: str, ids: List[str]):
        if not ids:
            return
        self.client.hdel(table, ids)

    def save_batch(self, table: str, entries: List[KeyValueDBTuple], expire_at: Optional[int] = None):
        if not entries:
            return

        mapping = dict(entries)
        if expire_at:
            self.client.hset_with_ttl(table, mapping, expire_at)
        else:
            self.client.hset(table, mapping)

        LOG.debug(f"Saved {len(mapping)} fields to hash '{table}'.")

    def stream_ids(self, table: str, limit: Optional[int] = None) -> Iterator[str]:
        ids = (field for batch in self.client.hscan_stream(table) for field in batch)
        return take(ids, limit)

    def stream_values(self, table: str, limit: Optional[int] = None) -> Iterator[bytes]:
        values = (value for batch in self.client.hscan_stream(table) for value in batch.values())
        return take(values, limit)

    def stream_entries(self, table: str, limit: Optional[int] = None) -> Iterator[KeyValueDBTuple]:
        entries = (entry for batch in self.client.hscan_stream(table) for entry in batch.items())
        return take(entries, limit)

    def count(self, table: str) -> int:
        return self.client.hscan_count(table)

    def increment_batch(self, table: str, increments: List[IncrementTuple]) -> List[IncrementTuple]:
        return self.client.hincr_batch(table, increments)
