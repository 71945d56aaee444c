##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Key-value database backed by plain Redis strings.

Every entry of a table is its own Redis key, `table:id`, holding the raw value.
Because each entry is a separate key, entries can carry their own expiry, which
is what makes this the backend of choice for TTL-based caches.
"""

import logging
from typing import Iterator, List, Optional

from redisdb.backends.common_key_value_db import CommonKeyValueDB, IncrementTuple, KeyValueDBTuple
from redisdb.backends.redis.redis_client import RedisClient
from redisdb.backends.redis.redis_utils import id_to_key, ids_to_keys, key_to_id, keys_to_ids, table_pattern
from redisdb.utils import take


LOG = logging.getLogger(__name__)


class RedisKeyValueDB(CommonKeyValueDB):
    """
    A `CommonKeyValueDB` that stores each entry at the Redis key `table:id`.

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
        self.client.drop_table(table)

    def get_by_ids(self, table: str, ids: List[str]) -> List[KeyValueDBTuple]:
        if not ids:
            return []
        # MGET returns the values in the same order as the requested keys
        values = self.client.mget_buffer(ids_to_keys(table, ids))
        return [(entity_id, value) for entity_id, value in zip(ids, values) if value is not None]

    def delete_by_ids(self, table: str, ids: List[str]):
        if not ids:
            return
        self.client.delete(ids_to_keys(table, ids))

    def save_batch(self, table: str, entries: List[KeyValueDBTuple], expire_at: Optional[int] = None):
        if not entries:
            return

        if expire_at:
            # There's no MSET with a TTL, so pipeline one SET EXAT per entry
            with self.client.with_pipeline() as pipeline:
                for entity_id, value in entries:
                    pipeline.set(id_to_key(table, entity_id), value, exat=expire_at)
        else:
            self.client.mset_buffer({id_to_key(table, entity_id): value for entity_id, value in entries})

        LOG.debug(f"Saved {len(entries)} entries to table '{table}'.")

    def stream_ids(self, table: str, limit: Optional[int] = None) -> Iterator[str]:
        ids = (key_to_id(table, key) for key in self.client.scan_stream_flat(match=table_pattern(table)))
        return take(ids, limit)

    def _stream_entries(self, table: str) -> Iterator[KeyValueDBTuple]:
        for keys in self.client.scan_stream(match=table_pattern(table)):
            values = self.client.mget_buffer(keys)
            for entity_id, value in zip(keys_to_ids(table, keys), values):
                # The key may have expired or been deleted since it was scanned
                if value is not None:
                    yield entity_id, value

    def stream_values(self, table: str, limit: Optional[int] = None) -> Iterator[bytes]:
        return take((value for _, value in self._stream_entries(table)), limit)

    def stream_entries(self, table: str, limit: Optional[int] = None) -> Iterator[KeyValueDBTuple]:
        return take(self._stream_entries(table), limit)

    def count(self, table: str) -> int:
        # TODO: count server-side with a Lua script instead of walking the whole SCAN
        return self.client.scan_count(match=table_pattern(table))

    def increment_batch(self, table: str, increments: List[IncrementTuple]) -> List[IncrementTuple]:
        results = self.client.incr_batch([(id_to_key(table, entity_id), by) for entity_id, by in increments])
        return [(key_to_id(table, key), value) for key, value in results]
