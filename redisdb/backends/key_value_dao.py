##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
A table-bound data access object over a `CommonKeyValueDB`.

`CommonKeyValueDao` fixes the table name and optionally converts values between
the raw bytes stored by the database and a friendlier Python type:

- `"bytes"`: values are passed through untouched
- `"str"`: values are UTF-8 encoded/decoded
- `"json"`: values are JSON encoded/decoded
"""

import json
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from redisdb.backends.common_key_value_db import CommonKeyValueDB, IncrementTuple
from redisdb.exceptions import EntityNotFoundError


VALUE_CODECS: Dict[str, Tuple[Callable[[Any], bytes], Callable[[bytes], Any]]] = {
    "bytes": (lambda v: v, lambda b: b),
    "str": (lambda v: v.encode("utf-8"), lambda b: b.decode("utf-8")),
    "json": (lambda v: json.dumps(v).encode("utf-8"), json.loads),
}


class CommonKeyValueDao:
    """
    Data access object bound to one table of a `CommonKeyValueDB`.

    Attributes:
        db (CommonKeyValueDB): The database to read and write.
        table (str): The table this DAO operates on.
        value_type (str): One of the keys of `VALUE_CODECS`.
    """

    def __init__(self, db: CommonKeyValueDB, table: str, value_type: str = "bytes"):
        """
        Initialize the DAO.

        Args:
            db: The database to read and write.
            table: The table this DAO operates on.
            value_type: How values are converted to and from bytes.

        Raises:
            ValueError: If `value_type` is not supported.
        """
        if value_type not in VALUE_CODECS:
            raise ValueError(f"Unsupported value type '{value_type}'. Supported types: {', '.join(VALUE_CODECS)}")
        self.db: CommonKeyValueDB = db
        self.table: str = table
        self.value_type: str = value_type
        self._encode, self._decode = VALUE_CODECS[value_type]

    def create_table(self, drop_if_exists: bool = False):
        self.db.create_table(self.table, drop_if_exists=drop_if_exists)

    def get_by_id(self, entity_id: Optional[str]) -> Optional[Any]:
        """
        Load the value stored for `entity_id`.

        Args:
            entity_id: The id to load. A falsy id returns None without querying.

        Returns:
            The decoded value, or None if it doesn't exist.
        """
        if not entity_id:
            return None
        entries = self.db.get_by_ids(self.table, [entity_id])
        return self._decode(entries[0][1]) if entries else None

    def require_by_id(self, entity_id: str) -> Any:
        """
        Like `get_by_id`, but raise if no entry is stored. A stored value that decodes
        to None (such as JSON `null`) is returned as is.

        Raises:
            EntityNotFoundError: If nothing is stored for `entity_id`.
        """
        entries = self.db.get_by_ids(self.table, [entity_id]) if entity_id else []
        if not entries:
            raise EntityNotFoundError(self.table, entity_id)
        return self._decode(entries[0][1])

    def get_by_ids(self, ids: List[str]) -> List[Tuple[str, Any]]:
        return [(entity_id, self._decode(value)) for entity_id, value in self.db.get_by_ids(self.table, ids)]

    def save(self, entity_id: str, value: Any, expire_at: Optional[int] = None):
        self.save_batch([(entity_id, value)], expire_at=expire_at)

    def save_batch(self, entries: List[Tuple[str, Any]], expire_at: Optional[int] = None):
        encoded = [(entity_id, self._encode(value)) for entity_id, value in entries]
        self.db.save_batch(self.table, encoded, expire_at=expire_at)

    def delete_by_id(self, entity_id: str):
        self.delete_by_ids([entity_id])

    def delete_by_ids(self, ids: List[str]):
        self.db.delete_by_ids(self.table, ids)

    def stream_ids(self, limit: Optional[int] = None) -> Iterator[str]:
        return self.db.stream_ids(self.table, limit)

    def stream_values(self, limit: Optional[int] = None) -> Iterator[Any]:
        return (self._decode(value) for value in self.db.stream_values(self.table, limit))

    def stream_entries(self, limit: Optional[int] = None) -> Iterator[Tuple[str, Any]]:
        return ((entity_id, self._decode(value)) for entity_id, value in self.db.stream_entries(self.table, limit))

    def count(self) -> int:
        return self.db.count(self.table)

    def increment(self, entity_id: str, by: int = 1) -> int:
        """
        Increment the numeric value stored for `entity_id`.

        Args:
            entity_id: The id to increment. A missing id starts at 0.
            by: The amount to add.

        Returns:
            The new value.
        """
        [(_, value)] = self.db.increment_batch(self.table, [(entity_id, by)])
        return value

    def increment_batch(self, increments: List[IncrementTuple]) -> List[IncrementTuple]:
        return self.db.increment_batch(self.table, increments)
