##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module of all redisdb-specific exception types.

Errors raised by the Redis client itself (`redis.exceptions.*`) are never
wrapped; they propagate to the caller unchanged.
"""

__all__ = (
    "BackendNotSupportedError",
    "ConfigNotFoundError",
    "EntityNotFoundError",
    "UnsupportedQueryOperatorError",
)


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the requested backend is not supported.
    """


class ConfigNotFoundError(Exception):
    """
    Exception to signal that an explicitly requested configuration file
    could not be found.
    """


class EntityNotFoundError(Exception):
    """
    Exception to signal that an entity that was required to exist is
    missing from its table.
    """

    def __init__(self, table: str, entity_id: str):
        super().__init__(f"Entity '{entity_id}' not found in table '{table}'.")
        self.table = table
        self.entity_id = entity_id


class UnsupportedQueryOperatorError(Exception):
    """
    Exception to signal that a query filter uses an operator the in-memory
    query runner does not understand.
    """
