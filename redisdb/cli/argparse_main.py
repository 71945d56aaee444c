##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Main CLI parser setup for the redisdb command-line interface.

This module defines the primary argument parser for the `redisdb` CLI tool,
including custom error handling and integration of all available subcommands.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from redisdb import VERSION
from redisdb.cli.commands import ALL_COMMANDS


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for the redisdb package.

    Returns:
        An `ArgumentParser` object with every command defined in redisdb.
    """
    parser = HelpParser(
        prog="redisdb",
        description="Inspect and maintain Redis-backed redisdb tables.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See redisdb <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=None,
        help="Set log level: DEBUG, INFO, WARNING, ERROR [Default: the `logging.level` config setting]",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to a redisdb config file (or a directory containing app.yaml).",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
