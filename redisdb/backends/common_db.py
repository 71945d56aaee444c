##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Abstract base class for table-oriented databases.

This module defines `CommonDB`, the interface that record-storing backends implement.
Records are plain dictionaries identified by a string `id`, grouped into tables.

The `CommonDB` class encapsulates:
- Batch get/save/delete by id, plus single-record convenience wrappers
- Query execution (`stream_query`, `run_query`, `run_query_count`, `delete_by_query`)
- Table lifecycle (`create_table`) and connectivity checks (`ping`)

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `RedisDB`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

from redisdb.backends.query import DBQuery


LOG = logging.getLogger(__name__)

DBEntity = Dict[str, Any]


class CommonDB(ABC):
    """
    Abstract base class for a table-oriented database.

    Implementations may be used as context managers; leaving the `with` block
    disconnects the underlying client.

    Methods:
        ping: Check that the database is reachable.
        create_table: Prepare a table, optionally dropping its existing contents.
        get_by_ids: Load the rows for the given ids.
        get_by_id: Load a single row.
        save_batch: Save rows.
        save: Save a single row.
        delete_by_ids: Delete rows by id.
        stream_query: Lazily iterate over the rows matching a query.
        run_query: Return the rows matching a query.
        run_query_count: Count the rows matching a query.
        delete_by_query: Delete the rows matching a query.
    """

    def __enter__(self) -> "CommonDB":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """
        Release any resources held by this database. No-op by default.
        """

    @abstractmethod
    def ping(self):
        """
        Check that the database is reachable. Raises if it is not.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `ping` method.")

    @abstractmethod
    def create_table(self, table: str, drop_if_exists: bool = False):
        """
        Prepare `table` for use.

        Args:
            table: The name of the table.
            drop_if_exists: If True, remove every row currently stored in `table`.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `create_table` method.")

    @abstractmethod
    def get_by_ids(self, table: str, ids: List[str]) -> List[DBEntity]:
        """
        Load the rows stored for `ids`. Missing ids are omitted.

        Args:
            table: The name of the table.
            ids: The ids to load.

        Returns:
            The rows that exist.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `get_by_ids` method.")

    @abstractmethod
    def save_batch(self, table: str, rows: List[DBEntity]):
        """
        Save `rows`, overwriting any existing row with the same id.

        Args:
            table: The name of the table.
            rows: The rows to save. Each must have an `id`.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `save_batch` method.")

    @abstractmethod
    def delete_by_ids(self, table: str, ids: List[str]) -> List[str]:
        """
        Delete the rows stored for `ids`.

        Args:
            table: The name of the table.
            ids: The ids to delete.

        Returns:
            The ids that were actually deleted.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `delete_by_ids` method.")

    @abstractmethod
    def stream_query(self, q: DBQuery) -> Iterator[DBEntity]:
        """
        Lazily iterate over the rows matching `q`.

        Args:
            q: The query to run.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `stream_query` method.")

    @abstractmethod
    def run_query(self, q: DBQuery) -> List[DBEntity]:
        """
        Return the rows matching `q`.

        Args:
            q: The query to run.
        """
        raise NotImplementedError("Subclasses of `CommonDB` must implement a `run_query` method.")

    def run_query_count(self, q: DBQuery) -> int:
        """
        Count the rows matching `q`.

        Args:
            q: The query to run.

        Returns:
            The number of matching rows.
        """
        return len(self.run_query(q))

    def delete_by_query(self, q: DBQuery) -> List[str]:
        """
        Delete the rows matching `q`.

        Args:
            q: The query selecting the rows to delete.

        Returns:
            The ids that were actually deleted.
        """
        rows = self.run_query(q)
        LOG.debug(f"Deleting {len(rows)} rows matching '{q.pretty()}'.")
        return self.delete_by_ids(q.table, [row["id"] for row in rows])

    def get_by_id(self, table: str, entity_id: str) -> Optional[DBEntity]:
        """
        Load a single row.

        Args:
            table: The name of the table.
            entity_id: The id of the row.

        Returns:
            The row if found, None otherwise.
        """
        rows = self.get_by_ids(table, [entity_id])
        return rows[0] if rows else None

    def save(self, table: str, row: DBEntity):
        """
        Save a single row.

        Args:
            table: The name of the table.
            row: The row to save. Must have an `id`.
        """
        self.save_batch(table, [row])
