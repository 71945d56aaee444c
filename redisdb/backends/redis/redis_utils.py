##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for the Redis backends.

Records of a table live at `table:id`. The id is recovered by slicing the table
prefix off the key, so ids may themselves contain `:`.
"""

import re
from typing import List


KEY_SEPARATOR = ":"
GLOB_SPECIAL_CHARS = re.compile(r"[\\*?\[\]]")


def table_pattern(table: str) -> str:
    """
    Get the SCAN pattern matching every key of `table`.

    Glob characters in the table name are escaped so they only match themselves.

    Args:
        table: The table name.

    Returns:
        The glob-style pattern `table:*`.
    """
    escaped = GLOB_SPECIAL_CHARS.sub(r"\\\g<0>", table)
    return f"{escaped}{KEY_SEPARATOR}*"


def id_to_key(table: str, entity_id: str) -> str:
    """
    Get the full Redis key for an entity.

    Args:
        table: The table name.
        entity_id: The entity ID.

    Returns:
        The full Redis key.
    """
    return f"{table}{KEY_SEPARATOR}{entity_id}"


def ids_to_keys(table: str, ids: List[str]) -> List[str]:
    return [id_to_key(table, entity_id) for entity_id in ids]


def key_to_id(table: str, key: str) -> str:
    """
    Strip the table prefix from a full Redis key.

    Args:
        table: The table name.
        key: A key produced by `id_to_key(table, ...)`.

    Returns:
        The entity ID.
    """
    return key[len(table) + len(KEY_SEPARATOR) :]


def keys_to_ids(table: str, keys: List[str]) -> List[str]:
    return [key_to_id(table, key) for key in keys]
