##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module provides functionality for locating, loading and caching the redisdb
configuration file.

It houses the `CONFIG` object that's used throughout redisdb's codebase.
"""
import logging
import os
from typing import Dict, Optional

from redisdb.config import Config
from redisdb.config.config_filepaths import APP_FILENAME, CONFIG_ENV_VAR, LOCAL_APP_FILENAME, REDISDB_HOME
from redisdb.exceptions import ConfigNotFoundError
from redisdb.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

CONFIG: Optional[Config] = None


def get_default_config() -> Dict:
    """
    Creates a minimal default configuration pointing at a local Redis server.

    Returns:
        A configuration dictionary with essential default values.
    """
    return {
        "redis": {
            "name": "redis",
            "server": "localhost",
            "port": 6379,
            "db_num": 0,
        },
        "logging": {
            "level": "INFO",
            "colors": True,
        },
    }


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a redisdb YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: Optional[str] = None) -> Optional[str]:
    """
    Locate the redisdb configuration file.

    If `path` is given it may be either the config file itself or a directory
    holding an `app.yaml`. Otherwise the following fallback sequence is used:
      1. The file named by the `REDISDB_CONFIG` environment variable.
      2. `redisdb.yaml` in the current working directory.
      3. `app.yaml` in the `~/.redisdb` directory.

    Args:
        path: A specific file or directory to look for the configuration in.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is not None:
        if os.path.isfile(path):
            return path
        app_path = os.path.join(path, APP_FILENAME)
        if os.path.isfile(app_path):
            return app_path
        return None

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path and os.path.isfile(env_path):
        return env_path

    local_app = os.path.join(os.getcwd(), LOCAL_APP_FILENAME)
    if os.path.isfile(local_app):
        return local_app

    home_app = os.path.join(REDISDB_HOME, APP_FILENAME)
    if os.path.isfile(home_app):
        return home_app

    return None


def load_defaults(config: Dict):
    """
    Fill in any settings missing from `config` with the values from `get_default_config`.

    Args:
        config: The configuration dictionary to be updated with default values.
    """
    for section, defaults in get_default_config().items():
        config.setdefault(section, {})
        if config[section] is None:
            config[section] = {}
        for key, val in defaults.items():
            config[section].setdefault(key, val)


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads a redisdb configuration file and returns a dictionary containing the configuration data.

    Args:
        path: The file or directory to search for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A dictionary containing all the configuration data with defaults applied.

    Raises:
        ConfigNotFoundError: If `path` was given explicitly but no configuration exists there.
    """
    filepath = find_config_file(path)
    if filepath is None:
        if path is not None:
            raise ConfigNotFoundError(f"Cannot find a redisdb config file at '{path}'.")
        LOG.debug("No redisdb config file found, using the default configuration.")
        config = get_default_config()
    else:
        config = load_config(filepath)

    load_defaults(config)
    return config


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Initializes and returns the redisdb configuration.

    This function can be used to explicitly (re)load the configuration when needed,
    rather than relying on the module-level CONFIG constant.

    Args:
        path: Path to look for a configuration file.

    Returns:
        The initialized configuration object.
    """
    global CONFIG  # pylint: disable=global-statement
    CONFIG = Config(get_config(path))
    return CONFIG


initialize_config()
