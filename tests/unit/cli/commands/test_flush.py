##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `flush.py` file of the `cli/commands/` folder.
"""

from argparse import Namespace
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from redisdb.cli.commands.flush import FlushCommand
from tests.fixture_types import FixtureCallable


@pytest.fixture
def flushed_client(mocker: MockerFixture) -> MagicMock:
    """
    Patch the client used by the `flush` command.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        The mocked client yielded by the `with` block of the command.
    """
    mock_client_cls = mocker.patch("redisdb.cli.commands.flush.RedisClient")
    return mock_client_cls.from_config.return_value.__enter__.return_value


def test_flush_parser(create_parser: FixtureCallable):
    """
    Ensure `flush` parses `--force`.

    Args:
        create_parser: Creates a parser with a command registered.
    """
    parser = create_parser(FlushCommand())
    assert parser.parse_args(["flush"]).force is False
    assert parser.parse_args(["flush", "-f"]).force is True


def test_flush_forced(mocker: MockerFixture, flushed_client: MagicMock):
    """
    Ensure `--force` flushes without asking.

    Args:
        mocker: PyTest mocker fixture.
        flushed_client: The mocked Redis client.
    """
    mock_input = mocker.patch("builtins.input")

    FlushCommand().process_command(Namespace(force=True))

    mock_input.assert_not_called()
    flushed_client.flush_database.assert_called_once()


@pytest.mark.parametrize("answer, flushed", [("y", True), ("YES", True), ("n", False), ("", False)])
def test_flush_confirmation(mocker: MockerFixture, flushed_client: MagicMock, answer: str, flushed: bool):
    """
    Ensure the database is only flushed after a positive confirmation.

    Args:
        mocker: PyTest mocker fixture.
        flushed_client: The mocked Redis client.
        answer: What the user types at the prompt.
        flushed: Whether the database should be flushed.
    """
    mocker.patch("builtins.input", return_value=answer)

    FlushCommand().process_command(Namespace(force=False))

    assert flushed_client.flush_database.called is flushed
