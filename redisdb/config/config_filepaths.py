##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
redisdb's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
LOCAL_APP_FILENAME: str = "redisdb.yaml"
CONFIG_ENV_VAR: str = "REDISDB_CONFIG"
USER_HOME: str = os.path.expanduser("~")
REDISDB_HOME: str = os.path.join(USER_HOME, ".redisdb")
