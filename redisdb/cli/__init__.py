##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Command-line interface for redisdb.

Modules:
    argparse_main: Builds the main `redisdb` argument parser.
    utils: Helpers shared by the CLI commands.
"""
