##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `abstracts/factory.py` module.
"""

from typing import Any, Type

import pytest
from pytest_mock import MockerFixture

from redisdb.abstracts import BaseFactory


class DummyComponent:
    """A testable dummy component."""


class DummyComponentWithInit:
    def __init__(self, foo=None, bar=None):
        self.foo = foo
        self.bar = bar


class FailingComponent:
    def __init__(self):
        raise RuntimeError("boom")


class TestableFactory(BaseFactory):
    def _register_builtins(self) -> None:
        self.register("dummy", DummyComponent, aliases=["alias_dummy"])

    def _validate_component(self, component_class: Any) -> None:
        if not isinstance(component_class, type):
            raise TypeError("Component must be a class")

    def _entry_point_group(self) -> str:
        return "redisdb.test_plugins"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        raise RuntimeError(msg)


class TestBaseFactory:
    """
    Unit test suite for the `BaseFactory` abstract base class.

    The tests use a concrete subclass (`TestableFactory`) and patch entry point
    discovery, so no installed plugins are involved.
    """

    @pytest.fixture
    def factory(self, mocker: MockerFixture) -> TestableFactory:
        """
        An instance of the dummy `TestableFactory` class with no discoverable plugins.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            An instance of the dummy `TestableFactory` class for testing.
        """
        mocker.patch("redisdb.abstracts.factory.entry_points", return_value=[])
        return TestableFactory()

    def test_register_and_list(self, factory: TestableFactory):
        """
        Test that components are registered and listed properly.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        assert factory.list_available() == ["dummy"]
        assert factory._registry["dummy"] is DummyComponent
        assert factory._aliases["alias_dummy"] == "dummy"

    def test_create_component(self, factory: TestableFactory):
        """
        Test instantiation of registered components, by name, by alias and with a config.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        assert isinstance(factory.create("dummy"), DummyComponent)
        assert isinstance(factory.create("alias_dummy"), DummyComponent)

        factory.register("with_init", DummyComponentWithInit)
        instance = factory.create("with_init", config={"foo": "a", "bar": 42})
        assert (instance.foo, instance.bar) == ("a", 42)

    def test_create_unregistered_component_raises(self, factory: TestableFactory):
        """
        Test that creating an unknown component raises the subclass's error type.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        with pytest.raises(RuntimeError, match="Component 'unknown' is not supported"):
            factory.create("unknown")

    def test_create_wraps_instantiation_errors(self, factory: TestableFactory):
        """
        Test that an exception from the component constructor is wrapped in a ValueError.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        factory.register("failing", FailingComponent)
        with pytest.raises(ValueError, match="Failed to create component 'failing': boom"):
            factory.create("failing")

    def test_register_invalid_component_raises(self, factory: TestableFactory):
        """
        Test that register raises TypeError for non-class input.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        with pytest.raises(TypeError):
            factory.register("bad", object())

    def test_get_component_info(self, factory: TestableFactory):
        """
        Test metadata returned from `get_component_info`.

        Args:
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        info = factory.get_component_info("alias_dummy")
        assert info == {
            "name": "dummy",
            "class": "DummyComponent",
            "module": DummyComponent.__module__,
            "description": "A testable dummy component.",
        }

    def test_discover_plugins(self, mocker: MockerFixture, factory: TestableFactory):
        """
        Test that entry points are registered, already registered names are skipped
        and plugins that fail to load are ignored.

        Args:
            mocker: PyTest mocker fixture.
            factory: An instance of the dummy `TestableFactory` class for testing.
        """
        good = mocker.MagicMock()
        good.name = "plugin"
        good.load.return_value = DummyComponentWithInit
        existing = mocker.MagicMock()
        existing.name = "dummy"
        broken = mocker.MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("missing dependency")
        mock_entry_points = mocker.patch(
            "redisdb.abstracts.factory.entry_points", return_value=[good, existing, broken]
        )

        assert sorted(factory.list_available()) == ["dummy", "plugin"]
        mock_entry_points.assert_called_with(group="redisdb.test_plugins")
        existing.load.assert_not_called()
        assert factory._registry["dummy"] is DummyComponent
