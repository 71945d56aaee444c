##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Abstract base class for key-value databases.

This module defines `CommonKeyValueDB`, the narrow get/save/scan/increment interface
that key-value backends implement. Entries are `(id, value)` tuples where the value
is raw bytes; tables are namespaces of ids.

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `RedisKeyValueDB` or `RedisHashKeyValueDB`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


KeyValueDBTuple = Tuple[str, bytes]
IncrementTuple = Tuple[str, int]


@dataclass(frozen=True)
class CommonKeyValueDBSupport:
    """
    Flags describing which optional capabilities a key-value backend supports.

    Attributes:
        increment: Whether `increment_batch` is supported.
        count: Whether `count` is supported.
        expire_at: Whether `save_batch` honors `expire_at`.
        streaming: Whether the `stream_*` methods are supported.
    """

    increment: bool = True
    count: bool = True
    expire_at: bool = True
    streaming: bool = True


COMMON_KEY_VALUE_DB_FULL_SUPPORT = CommonKeyValueDBSupport()


class CommonKeyValueDB(ABC):
    """
    Abstract base class for a key-value database.

    Implementations may be used as context managers; leaving the `with` block
    disconnects the underlying client.

    Attributes:
        support (CommonKeyValueDBSupport): The capabilities of this backend.

    Methods:
        ping: Check that the database is reachable.
        create_table: Prepare a table, optionally dropping its existing contents.
        get_by_ids: Load the entries for the given ids.
        delete_by_ids: Delete the entries for the given ids.
        save_batch: Save entries, optionally with an absolute expiry.
        stream_ids: Iterate over the ids of a table.
        stream_values: Iterate over the values of a table.
        stream_entries: Iterate over the entries of a table.
        count: Count the entries of a table.
        increment_batch: Atomically increment numeric entries and return the new values.
    """

    support: CommonKeyValueDBSupport = COMMON_KEY_VALUE_DB_FULL_SUPPORT

    def __enter__(self) -> "CommonKeyValueDB":
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
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `ping` method.")

    @abstractmethod
    def create_table(self, table: str, drop_if_exists: bool = False):
        """
        Prepare `table` for use.

        Args:
            table: The name of the table.
            drop_if_exists: If True, remove everything currently stored in `table`.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `create_table` method.")

    @abstractmethod
    def get_by_ids(self, table: str, ids: List[str]) -> List[KeyValueDBTuple]:
        """
        Load the entries stored for `ids`.

        Args:
            table: The name of the table.
            ids: The ids to load.

        Returns:
            The `(id, value)` tuples that exist, in the order of `ids`. Missing ids are omitted.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `get_by_ids` method.")

    @abstractmethod
    def delete_by_ids(self, table: str, ids: List[str]):
        """
        Delete the entries stored for `ids`. Missing ids are ignored.

        Args:
            table: The name of the table.
            ids: The ids to delete.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `delete_by_ids` method.")

    @abstractmethod
    def save_batch(self, table: str, entries: List[KeyValueDBTuple], expire_at: Optional[int] = None):
        """
        Save `entries`, overwriting any existing values.

        Args:
            table: The name of the table.
            entries: The `(id, value)` tuples to save.
            expire_at: An optional absolute expiry time (unix timestamp in seconds).
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `save_batch` method.")

    @abstractmethod
    def stream_ids(self, table: str, limit: Optional[int] = None) -> Iterator[str]:
        """
        Iterate over the ids stored in `table`, in no particular order.

        Args:
            table: The name of the table.
            limit: The maximum number of ids to yield. None or 0 means unlimited.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `stream_ids` method.")

    @abstractmethod
    def stream_values(self, table: str, limit: Optional[int] = None) -> Iterator[bytes]:
        """
        Iterate over the values stored in `table`, in no particular order.

        Args:
            table: The name of the table.
            limit: The maximum number of values to yield. None or 0 means unlimited.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `stream_values` method.")

    @abstractmethod
    def stream_entries(self, table: str, limit: Optional[int] = None) -> Iterator[KeyValueDBTuple]:
        """
        Iterate over the `(id, value)` entries stored in `table`, in no particular order.

        Args:
            table: The name of the table.
            limit: The maximum number of entries to yield. None or 0 means unlimited.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `stream_entries` method.")

    @abstractmethod
    def count(self, table: str) -> int:
        """
        Count the entries stored in `table`.

        Args:
            table: The name of the table.

        Returns:
            The number of entries.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement a `count` method.")

    @abstractmethod
    def increment_batch(self, table: str, increments: List[IncrementTuple]) -> List[IncrementTuple]:
        """
        Increment the numeric values stored for each id. Missing ids start at 0.

        Args:
            table: The name of the table.
            increments: `(id, by)` tuples.

        Returns:
            `(id, new_value)` tuples in the order of `increments`.
        """
        raise NotImplementedError("Subclasses of `CommonKeyValueDB` must implement an `increment_batch` method.")
