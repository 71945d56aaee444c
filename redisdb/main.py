##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Main entry point into redisdb's command-line interface.
"""

import logging
import sys
import traceback

from redisdb.cli.argparse_main import build_main_parser
from redisdb.config import configfile
from redisdb.log_formatter import setup_logging


LOG = logging.getLogger("redisdb")


def main():
    """
    Entry point for the redisdb command-line interface.

    This function sets up the argument parser, loads the configuration and
    initializes logging from it, then executes the function attached to the chosen command.
    Any error raised by a command (including Redis errors) is logged and turns
    into exit code 1.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    try:
        if args.config:
            configfile.initialize_config(args.config)
        log_config = configfile.CONFIG.logging
        log_level = args.level or log_config.level
        setup_logging(logger=LOG, log_level=log_level.upper(), colors=log_config.colors)
        args.func(args)
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
