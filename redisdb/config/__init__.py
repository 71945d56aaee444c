##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the redisdb YAML configuration file and turns it
into attribute-style namespaces that the rest of the package reads from.

Modules:
    config_filepaths.py: Constants for where configuration files live.
    configfile.py: Locates, loads and caches the application configuration.
    connection.py: Builds Redis connection strings and client options from the configuration.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from redisdb.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all redisdb config settings in one place.

    Attributes:
        redis (Optional[SimpleNamespace]): A namespace containing Redis connection settings.
        logging (Optional[SimpleNamespace]): A namespace containing logging settings.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    fields: List[str] = ["redis", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The keys "redis" and "logging" are each converted into a `SimpleNamespace`
                and assigned to the corresponding attribute of the Config instance.
        """
        self.redis: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied `redis` and `logging` attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({field: copy(self.__dict__[field]) for field in self.fields})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of each configuration section.
        """
        formatted_str = "config:"
        for name in self.fields:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items() if k != "password")
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in self.fields:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass
