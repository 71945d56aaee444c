##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Table-record database backed by Redis.

This module provides a concrete implementation of the `CommonDB` interface using Redis
as the underlying database. Each record is stored as JSON text at the key `table:id`.

Redis has no query engine, so queries are emulated: when `run_queries` is enabled,
`stream_query` walks every key of the table with SCAN, loads each batch with MGET
and filters it in memory. With large tables this loads the whole table, which is
why query emulation is off unless explicitly requested.
"""

import logging
from typing import Iterator, List, Optional

from redisdb.backends.common_db import CommonDB, DBEntity
from redisdb.backends.query import DBQuery, query_in_memory
from redisdb.backends.redis.redis_client import RedisClient
from redisdb.backends.redis.redis_utils import id_to_key, ids_to_keys, keys_to_ids, table_pattern
from redisdb.backends.utils import deserialize_entity, serialize_entity


LOG = logging.getLogger(__name__)


class RedisDB(CommonDB):
    """
    A Redis-based implementation of the `CommonDB` interface.

    `stream_query` never applies ordering or limits; it yields every matching row
    in SCAN order. `run_query` applies the full query.

    Attributes:
        client (RedisClient): The client used for all Redis commands.
        run_queries (bool): If True, emulate queries by scanning `table:*` and filtering
            in memory. If False, queries return no rows.

    Methods:
        reset_cache: Remove everything stored in the Redis database.
    """

    def __init__(self, client: Optional[RedisClient] = None, run_queries: bool = False):
        """
        Initialize the database.

        Args:
            client: The Redis client to use. Defaults to one built from the configuration file.
            run_queries: Whether to emulate queries with a full table scan.
        """
        self.client: RedisClient = client if client is not None else RedisClient.from_config()
        self.run_queries: bool = run_queries

    def ping(self):
        self.client.ping()

    def close(self):
        self.client.disconnect()

    def reset_cache(self):
        """
        Remove everything stored in the Redis database.
        """
        self.client.flush_database()

    def create_table(self, table: str, drop_if_exists: bool = False):
        if not drop_if_exists:
            return
        self.client.drop_table(table)

    def save_batch(self, table: str, rows: List[DBEntity]):
        if not rows:
            return
        self.client.mset({id_to_key(table, row["id"]): serialize_entity(row) for row in rows})
        LOG.debug(f"Saved {len(rows)} rows to table '{table}'.")

    def get_by_ids(self, table: str, ids: List[str]) -> List[DBEntity]:
        if not ids:
            return []
        values = self.client.mget(ids_to_keys(table, ids))
        rows = (deserialize_entity(value) for value in values if value is not None)
        return [row for row in rows if row is not None]

    def delete_by_ids(self, table: str, ids: List[str]) -> List[str]:
        if not ids:
            return []
        pipeline = self.client.pipeline()
        for entity_id in ids:
            pipeline.delete(id_to_key(table, entity_id))
        results = pipeline.execute()
        deleted_ids = [entity_id for entity_id, deleted in zip(ids, results) if deleted == 1]
        LOG.debug(f"Deleted {len(deleted_ids)} of {len(ids)} requested rows from table '{table}'.")
        return deleted_ids

    def stream_query(self, q: DBQuery) -> Iterator[DBEntity]:
        if not self.run_queries:
            LOG.debug(f"Query emulation is disabled, skipping query '{q.pretty()}'.")
            return

        for keys in self.client.scan_stream(match=table_pattern(q.table)):
            rows = self.get_by_ids(q.table, keys_to_ids(q.table, keys))
            yield from (row for row in rows if q.matches(row))

    def run_query(self, q: DBQuery) -> List[DBEntity]:
        return query_in_memory(q, self.stream_query(q))
