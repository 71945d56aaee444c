##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis-based backends for redisdb.

This package provides the Redis implementations of the common database interfaces,
each choosing a different subset of Redis commands.

Modules:
    redis_client: `RedisClient`, the lazily-connecting wrapper around redis-py.
    redis_db: `RedisDB`, the table-record database storing JSON at `table:id`.
    redis_key_value_db: `RedisKeyValueDB`, a key-value database with one key per entry.
    redis_hash_key_value_db: `RedisHashKeyValueDB`, a key-value database with one hash per table.
    redis_utils: Key naming helpers.
"""
