##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for backends in redisdb.

These utilities convert records to and from the text form that is stored in the
database. Records are JSON encoded; a value that can't be decoded is logged and
treated as missing rather than failing the whole read.
"""

import json
import logging
from typing import Any, Dict, Optional, Union


LOG = logging.getLogger(__name__)


def serialize_entity(entity: Dict[str, Any]) -> str:
    """
    Convert a record into a format that the database can store.

    Args:
        entity: A record, i.e. a JSON-serializable dictionary with an `id`.

    Returns:
        The JSON encoded record.
    """
    return json.dumps(entity)


def deserialize_entity(data: Optional[Union[str, bytes]]) -> Optional[Dict[str, Any]]:
    """
    Given data that was retrieved, convert it back into a record.

    Args:
        data: The stored JSON text (or bytes), or None if nothing was stored.

    Returns:
        The decoded record, or None if `data` is empty or isn't valid JSON.
    """
    if not data:
        return None
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        LOG.error(f"Failed to deserialize stored value {data!r} ({type(data).__name__}): {e}")
        return None
