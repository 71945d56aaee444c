##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI commands that operate on a single key-value table.

This module defines:
- `CountCommand`: `redisdb count TABLE`, prints the number of entries in a table.
- `GetCommand`: `redisdb get TABLE ID...`, prints the stored values for the given ids.
- `DropTableCommand`: `redisdb drop-table TABLE`, deletes every entry of a table.

Every command accepts `--hash` to address a table stored as one Redis hash.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tabulate import tabulate

from redisdb.backends.redis.redis_client import RedisClient
from redisdb.cli.commands.command_entry_point import CommandEntryPoint
from redisdb.cli.utils import add_hash_argument, get_key_value_db


LOG = logging.getLogger(__name__)


class CountCommand(CommandEntryPoint):
    """
    Handles the `count` CLI command.
    """

    def add_parser(self, subparsers: ArgumentParser):
        count: ArgumentParser = subparsers.add_parser(
            "count",
            help="Count the entries of a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        count.set_defaults(func=self.process_command)
        count.add_argument("table", type=str, help="The table to count.")
        add_hash_argument(count)

    def process_command(self, args: Namespace):
        with get_key_value_db(args, RedisClient.from_config()) as db:
            print(db.count(args.table))


class GetCommand(CommandEntryPoint):
    """
    Handles the `get` CLI command.
    """

    def add_parser(self, subparsers: ArgumentParser):
        get: ArgumentParser = subparsers.add_parser(
            "get",
            help="Print the values stored for one or more ids of a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        get.set_defaults(func=self.process_command)
        get.add_argument("table", type=str, help="The table to read from.")
        get.add_argument("ids", type=str, nargs="+", help="The ids to look up.")
        add_hash_argument(get)

    def process_command(self, args: Namespace):
        with get_key_value_db(args, RedisClient.from_config()) as db:
            entries = db.get_by_ids(args.table, args.ids)

        if not entries:
            LOG.info(f"No entries found in table '{args.table}' for the given ids.")
            return

        found = {entity_id for entity_id, _ in entries}
        for missing in (entity_id for entity_id in args.ids if entity_id not in found):
            LOG.warning(f"No entry with id '{missing}' in table '{args.table}'.")

        rows = [(entity_id, value.decode("utf-8", errors="replace")) for entity_id, value in entries]
        print(tabulate(rows, headers=["id", "value"]))


class DropTableCommand(CommandEntryPoint):
    """
    Handles the `drop-table` CLI command.
    """

    def add_parser(self, subparsers: ArgumentParser):
        drop: ArgumentParser = subparsers.add_parser(
            "drop-table",
            help="Delete every entry of a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        drop.set_defaults(func=self.process_command)
        drop.add_argument("table", type=str, help="The table to drop.")
        add_hash_argument(drop)

    def process_command(self, args: Namespace):
        with get_key_value_db(args, RedisClient.from_config()) as db:
            db.create_table(args.table, drop_if_exists=True)
        LOG.info(f"Dropped table '{args.table}'.")
