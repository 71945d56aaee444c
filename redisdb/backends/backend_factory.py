##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Backend factory for selecting and instantiating database backends in redisdb.

This module defines the `RedisDBBackendFactory` class, which maps backend names
(and aliases) to the classes implementing them. Third-party backends can be added
through the `redisdb.backends` entry point group.
"""

from typing import Any

from redisdb.abstracts import BaseFactory
from redisdb.backends.common_db import CommonDB
from redisdb.backends.common_key_value_db import CommonKeyValueDB
from redisdb.backends.redis.redis_db import RedisDB
from redisdb.backends.redis.redis_hash_key_value_db import RedisHashKeyValueDB
from redisdb.backends.redis.redis_key_value_db import RedisKeyValueDB
from redisdb.exceptions import BackendNotSupportedError


class RedisDBBackendFactory(BaseFactory):
    """
    Factory class for managing and instantiating supported backends.

    Attributes:
        _registry (Dict[str, Any]): Maps canonical backend names to backend classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical backend names.

    Methods:
        register: Register a new backend class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a backend class by name or alias.
        get_component_info: Return metadata about a registered backend.
    """

    def _register_builtins(self):
        """
        Register built-in backend implementations.
        """
        self.register("redis", RedisDB)
        self.register("redis_kv", RedisKeyValueDB, aliases=["kv"])
        self.register("redis_hash_kv", RedisHashKeyValueDB, aliases=["hash_kv"])

    def _validate_component(self, component_class: Any):
        """
        Ensure a registered component implements one of the database interfaces.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component subclasses neither CommonDB nor CommonKeyValueDB.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, (CommonDB, CommonKeyValueDB)):
            raise TypeError(f"{component_class} must inherit from CommonDB or CommonKeyValueDB")

    def _entry_point_group(self) -> str:
        return "redisdb.backends"

    def _raise_component_error_class(self, msg: str):
        raise BackendNotSupportedError(msg)


backend_factory = RedisDBBackendFactory()
