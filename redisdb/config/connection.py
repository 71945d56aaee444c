##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module builds Redis connection strings and client options from the
`redis` section of the redisdb configuration file.
"""

import logging
import os
from typing import Dict, Optional
from urllib.parse import quote

from redisdb.config import Config, configfile
from redisdb.config.config_filepaths import REDISDB_HOME


LOG = logging.getLogger(__name__)

DEFAULT_PORT = 6379
DEFAULT_DB_NUM = 0
MASKED_PASSWORD = "******"


def get_backend_password(password_file: str, certs_path: Optional[str] = None) -> str:
    """
    Retrieves the Redis password from a specified file or returns the provided password value.

    This function attempts to locate the password file in several locations:

    1. The default redisdb directory (`~/.redisdb`).
    2. The path specified by `password_file`.
    3. A directory specified by `certs_path` (if provided).

    If the password file is found, the password is read from the file. If the file cannot be
    found, the value of `password_file` is treated as the password itself and returned.

    Args:
        password_file: The file path or value for the password.
        certs_path: An optional directory path where password files may be located.

    Returns:
        The password, either retrieved from the file or the provided value.
    """
    home_pass = os.path.join(REDISDB_HOME, password_file)
    password_file = os.path.expanduser(password_file)

    password_filepath = ""
    if os.path.exists(home_pass):
        password_filepath = home_pass
    elif os.path.exists(password_file):
        password_filepath = password_file
    elif certs_path:
        password_filepath = os.path.join(certs_path, password_file)

    if not os.path.exists(password_filepath):
        # The password was given instead of the filepath.
        password = password_file.strip()
    else:
        with open(password_filepath, "r") as f:  # pylint: disable=C0103
            password = quote(f.readline().strip(), safe="")

    LOG.debug("Password resolution: using file." if password_filepath else "Password resolution: using direct value.")
    return password


def _get_config(config: Optional[Config]) -> Config:
    return config if config is not None else configfile.CONFIG


def uses_ssl(config: Optional[Config] = None) -> bool:
    """
    Determine whether the configured connection should use TLS (`rediss://`).

    Args:
        config: The configuration to read. Defaults to the module-level CONFIG.

    Returns:
        True if TLS should be used, False otherwise.
    """
    redis_config = _get_config(config).redis
    return bool(getattr(redis_config, "ssl", False)) or getattr(redis_config, "name", "redis") == "rediss"


def get_connection_string(include_password: bool = True, config: Optional[Config] = None) -> str:
    """
    Constructs and returns a Redis or Rediss connection URL from the configuration.

    Args:
        include_password: Whether to include the password in the connection URL.
            If False, the password will be masked.
        config: The configuration to read. Defaults to the module-level CONFIG.

    Returns:
        A connection URL of the form `redis[s]://[user:pass@]server:port/db_num`.
    """
    redis_config = _get_config(config).redis
    urlbase = "rediss" if uses_ssl(config) else "redis"

    server = getattr(redis_config, "server", "localhost")
    port = getattr(redis_config, "port", DEFAULT_PORT)
    db_num = getattr(redis_config, "db_num", DEFAULT_DB_NUM)
    username = getattr(redis_config, "username", "") or ""
    password_file = getattr(redis_config, "password", None)

    if password_file:
        password = get_backend_password(str(password_file), certs_path=getattr(redis_config, "cert_path", None))
        spass = f"{username}:{password if include_password else MASKED_PASSWORD}@"
    else:
        spass = ""
        LOG.debug("No Redis password configured.")

    return f"{urlbase}://{spass}{server}:{port}/{db_num}"


def get_redis_options(config: Optional[Config] = None) -> Dict:
    """
    Build the keyword arguments for `redis.Redis.from_url` from the configuration.

    Args:
        config: The configuration to read. Defaults to the module-level CONFIG.

    Returns:
        A dictionary of client options, always including the connection `url`.
    """
    redis_config = _get_config(config).redis
    options = {"url": get_connection_string(include_password=True, config=config)}
    if uses_ssl(config):
        options["ssl_cert_reqs"] = getattr(redis_config, "cert_reqs", "required")

    for option in ("socket_timeout", "socket_connect_timeout", "health_check_interval"):
        value = getattr(redis_config, option, None)
        if value is not None:
            options[option] = value

    return options
