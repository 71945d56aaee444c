##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Base factory class for managing pluggable components in redisdb.

This module defines an abstract `BaseFactory` class that provides a reusable
infrastructure for registering, discovering, and instantiating pluggable components.
It supports alias resolution, entry-point-based plugin discovery, and runtime
introspection of registered components.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List


LOG = logging.getLogger(__name__)


class BaseFactory(ABC):
    """
    Abstract base factory for managing and instantiating pluggable components.

    Subclasses are required to:
        - Implement `_register_builtins()` to register default implementations
        - Implement `_validate_component()` to enforce interface/type constraints
        - Define `_entry_point_group()` to identify the entry point namespace for discovery

    Attributes:
        _registry (Dict[str, Any]): Maps canonical component names to their classes.
        _aliases (Dict[str, str]): Maps alias names to canonical component names.

    Methods:
        register: Register a new component and its optional aliases.
        list_available: Return a list of all registered component names.
        create: Instantiate a registered component by name or alias.
        get_component_info: Return introspection metadata for a registered component.
    """

    def __init__(self):
        """
        Initialize the base factory and register the built-in components.
        """
        # Map canonical names to implementation classes
        self._registry: Dict[str, Any] = {}

        # Map aliases to canonical names
        self._aliases: Dict[str, str] = {}

        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """
        Register built-in components.
        """
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Validate the component class before registration.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If `component_class` is not valid.
        """
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_validate_component` method.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """
        Return the entry point group used for plugin discovery.

        Returns:
            The entry point group used for plugin discovery.
        """
        raise NotImplementedError("Subclasses must define an entry point group.")

    def _discover_plugins(self):
        """
        Discover and register plugin components via Python entry points.
        """
        for entry_point in entry_points(group=self._entry_point_group()):
            if entry_point.name in self._registry:
                continue
            try:
                plugin_class = entry_point.load()
                self.register(entry_point.name, plugin_class)
                LOG.info(f"Loaded plugin via entry point: {entry_point.name}")
            except Exception as e:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}': {e}")

    def _raise_component_error_class(self, msg: str):
        """
        Raise an appropriate exception when an invalid component is requested.

        Subclasses should override this to raise more specific exceptions.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            ValueError: By default.
        """
        raise ValueError(msg)

    def register(self, name: str, component_class: Any, aliases: List[str] = None) -> None:
        """
        Register a new component implementation.

        Args:
            name: Canonical name for the component.
            component_class: The class or implementation to register.
            aliases: Optional alternative names for this component.

        Raises:
            TypeError: If the component_class fails validation.
        """
        self._validate_component(component_class)

        self._registry[name] = component_class
        LOG.debug(f"Registered component: {name}")

        for alias in aliases or []:
            self._aliases[alias] = name
            LOG.debug(f"Registered alias '{alias}' for component '{name}'")

    def list_available(self) -> List[str]:
        """
        Return a list of supported component names, including discovered plugins.

        Returns:
            A list of canonical names for all available components.
        """
        self._discover_plugins()
        return list(self._registry.keys())

    def _get_component_class(self, canonical_name: str, component_type: str) -> Any:
        """
        Retrieve a registered component class by its canonical name.

        Args:
            canonical_name: The canonical name of the component (resolved from alias).
            component_type: The original name or alias provided by the user (used in error messages).

        Returns:
            The class object corresponding to the requested component.
        """
        if canonical_name not in self._registry:
            self._discover_plugins()

        component_class = self._registry.get(canonical_name)
        if component_class is None:
            available = ", ".join(self.list_available())
            self._raise_component_error_class(
                f"Component '{component_type}' is not supported. Available components: {available}"
            )

        return component_class

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Instantiate and return a component of the specified type.

        Args:
            component_type: The name or alias of the component to create.
            config: Optional keyword arguments for initializing the component.

        Returns:
            An instance of the requested component.

        Raises:
            ValueError: If instantiation fails.
        """
        canonical_name = self._aliases.get(component_type, component_type)
        component_class = self._get_component_class(canonical_name, component_type)

        try:
            instance = component_class() if config is None else component_class(**config)
        except Exception as e:
            raise ValueError(f"Failed to create component '{canonical_name}': {e}") from e

        LOG.debug(f"Created component '{canonical_name}'")
        return instance

    def get_component_info(self, component_type: str) -> Dict:
        """
        Get introspection information about a registered component.

        Args:
            component_type: The name or alias of the component.

        Returns:
            Dictionary containing metadata such as name, class, module, and docstring.
        """
        canonical_name = self._aliases.get(component_type, component_type)
        component_class = self._get_component_class(canonical_name, component_type)

        return {
            "name": canonical_name,
            "class": component_class.__name__,
            "module": component_class.__module__,
            "description": component_class.__doc__ or "No description available",
        }
