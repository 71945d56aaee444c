##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Abstract building blocks shared across redisdb.

Modules:
    factory: Contains `BaseFactory`, the registry/plugin base used by the backend factory.
"""

from redisdb.abstracts.factory import BaseFactory


__all__ = ["BaseFactory"]
