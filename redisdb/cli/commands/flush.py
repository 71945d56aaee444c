##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for removing everything stored in the configured Redis database.
"""

import logging
from argparse import ArgumentParser, Namespace

from redisdb.backends.redis.redis_client import RedisClient
from redisdb.cli.commands.command_entry_point import CommandEntryPoint
from redisdb.config.connection import get_connection_string


LOG = logging.getLogger(__name__)


class FlushCommand(CommandEntryPoint):
    """
    Handles the `flush` CLI command.

    Methods:
        add_parser: Adds the `flush` command to the CLI parser.
        process_command: Flushes the database after confirmation.
    """

    def add_parser(self, subparsers: ArgumentParser):
        flush: ArgumentParser = subparsers.add_parser(
            "flush", help="Remove everything stored in the configured Redis database."
        )
        flush.set_defaults(func=self.process_command)
        flush.add_argument(
            "-f",
            "--force",
            action="store_true",
            default=False,
            help="Flush without asking for confirmation.",
        )

    def process_command(self, args: Namespace):
        """
        Flush the database, asking for confirmation unless `--force` was given.

        Args:
            args: Parsed CLI arguments.
        """
        connection = get_connection_string(include_password=False)
        if not args.force:
            answer = input(f"Remove everything stored in {connection}? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                LOG.info("Flush aborted.")
                return

        with RedisClient.from_config() as client:
            client.flush_database()
        LOG.info(f"Flushed {connection}.")
