##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for the redisdb CLI.
"""

from argparse import ArgumentParser, Namespace

from redisdb.backends.backend_factory import backend_factory
from redisdb.backends.common_key_value_db import CommonKeyValueDB
from redisdb.backends.redis.redis_client import RedisClient


def add_hash_argument(parser: ArgumentParser):
    """
    Add the `--hash` flag used by commands that work on key-value tables.

    Args:
        parser: The parser to add the flag to.
    """
    parser.add_argument(
        "--hash",
        action="store_true",
        default=False,
        help="Treat the table as a single Redis hash instead of `table:id` keys.",
    )


def get_key_value_db(args: Namespace, client: RedisClient) -> CommonKeyValueDB:
    """
    Create the key-value database selected by the `--hash` flag.

    Args:
        args: Parsed CLI arguments.
        client: The Redis client the database should use.

    Returns:
        A `RedisHashKeyValueDB` if `--hash` was given, otherwise a `RedisKeyValueDB`.
    """
    backend = "redis_hash_kv" if args.hash else "redis_kv"
    return backend_factory.create(backend, {"client": client})
