##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
redisdb CLI Commands Package.

Each module encapsulates the logic and argument parsing for a distinct command,
following a consistent structure built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    flush: Implements the `flush` command for emptying the Redis database.
    info: Implements the `info` command for displaying configuration and server diagnostics.
    ping: Implements the `ping` command for checking connectivity.
    table: Implements the `count`, `get` and `drop-table` commands for key-value tables.
"""

from redisdb.cli.commands.flush import FlushCommand
from redisdb.cli.commands.info import InfoCommand
from redisdb.cli.commands.ping import PingCommand
from redisdb.cli.commands.table import CountCommand, DropTableCommand, GetCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    CountCommand(),
    DropTableCommand(),
    FlushCommand(),
    GetCommand(),
    InfoCommand(),
    PingCommand(),
]
