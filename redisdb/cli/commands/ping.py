##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for checking that the configured Redis server is reachable.
"""

import logging
from argparse import ArgumentParser, Namespace

from redisdb.backends.redis.redis_client import RedisClient
from redisdb.cli.commands.command_entry_point import CommandEntryPoint
from redisdb.config.connection import get_connection_string


LOG = logging.getLogger(__name__)


class PingCommand(CommandEntryPoint):
    """
    Handles the `ping` CLI command.

    Methods:
        add_parser: Adds the `ping` command to the CLI parser.
        process_command: Sends PING to the configured server.
    """

    def add_parser(self, subparsers: ArgumentParser):
        ping: ArgumentParser = subparsers.add_parser("ping", help="Check that the Redis server is reachable.")
        ping.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Send PING to the configured server. Connection errors propagate to `main`.

        Args:
            args: Parsed CLI arguments.
        """
        with RedisClient.from_config() as client:
            client.ping()
        LOG.info(f"Redis at {get_connection_string(include_password=False)} is reachable.")
