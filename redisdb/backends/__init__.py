##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Backend infrastructure for redisdb.

The `backends` package defines the generic database interfaces and their Redis
implementations.

Subpackages:
    redis: Redis-based implementations of `CommonDB` and `CommonKeyValueDB`.

Modules:
    backend_factory: Contains `RedisDBBackendFactory`, used to select and instantiate a backend by name.
    common_db: Defines the abstract table-record `CommonDB` interface.
    common_key_value_db: Defines the abstract `CommonKeyValueDB` interface.
    key_value_dao: Contains `CommonKeyValueDao`, a table-bound helper over a `CommonKeyValueDB`.
    query: Defines `DBQuery` and the in-memory query runner.
    utils: Record serialization helpers.
"""
