##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
redisdb: Redis-backed implementations of the common database interfaces.

This package adapts a Redis key-value store to a generic table/record database
abstraction and to a narrower key-value abstraction, so application code written
against those interfaces can use Redis as a backing store.
"""

__version__ = "1.0.0"
VERSION = __version__
