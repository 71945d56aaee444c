##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for displaying configuration and server information.

This module defines the `InfoCommand` class, which handles the `info` subcommand.
It prints the active configuration, the (masked) connection string and the version
reported by the Redis server, which is useful for verifying a setup.
"""

from argparse import ArgumentParser, Namespace

from redis.exceptions import RedisError
from tabulate import tabulate

from redisdb import VERSION
from redisdb.backends.redis.redis_client import RedisClient
from redisdb.cli.commands.command_entry_point import CommandEntryPoint
from redisdb.config import configfile
from redisdb.config.connection import get_connection_string


class InfoCommand(CommandEntryPoint):
    """
    Handles the `info` CLI command.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Prints the configuration and server information.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="Display the redisdb configuration and the version of the Redis server. Useful for debugging.",
        )
        info.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        CLI command to print configuration and server info.

        Args:
            args: Parsed CLI arguments.
        """
        print(configfile.CONFIG)
        print()

        with RedisClient.from_config() as client:
            try:
                server_version = client.get_version()
            except RedisError as exc:
                server_version = f"unreachable ({exc})"

        info = [
            ("redisdb version", VERSION),
            ("connection", get_connection_string(include_password=False)),
            ("redis server version", server_version),
        ]
        print(tabulate(info, tablefmt="presto"))
