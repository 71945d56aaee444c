##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `key_value_dao.py` module.
"""
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from redisdb.backends.common_key_value_db import CommonKeyValueDB
from redisdb.backends.key_value_dao import CommonKeyValueDao
from redisdb.exceptions import EntityNotFoundError


@pytest.fixture
def mock_kv_db(mocker: MockerFixture) -> MagicMock:
    """
    A mocked `CommonKeyValueDB`.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        A `MagicMock` with the `CommonKeyValueDB` interface.
    """
    return mocker.MagicMock(spec=CommonKeyValueDB)


class TestCommonKeyValueDao:
    """
    Tests for `CommonKeyValueDao`, which binds a table and converts values.
    """

    def test_invalid_value_type(self, mock_kv_db: MagicMock):
        """
        Test that an unknown value type is rejected.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        with pytest.raises(ValueError, match="Unsupported value type 'xml'"):
            CommonKeyValueDao(mock_kv_db, "t", value_type="xml")

    def test_get_by_id(self, mock_kv_db: MagicMock):
        """
        Test loading a single value, a missing value and a falsy id.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        dao = CommonKeyValueDao(mock_kv_db, "sessions", value_type="str")

        mock_kv_db.get_by_ids.return_value = [("s1", b"hello")]
        assert dao.get_by_id("s1") == "hello"
        mock_kv_db.get_by_ids.assert_called_once_with("sessions", ["s1"])

        mock_kv_db.get_by_ids.return_value = []
        assert dao.get_by_id("s2") is None

        mock_kv_db.get_by_ids.reset_mock()
        assert dao.get_by_id("") is None
        mock_kv_db.get_by_ids.assert_not_called()

    def test_require_by_id(self, mock_kv_db: MagicMock):
        """
        Test that `require_by_id` raises `EntityNotFoundError` for a missing value.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        mock_kv_db.get_by_ids.return_value = []
        dao = CommonKeyValueDao(mock_kv_db, "sessions")

        with pytest.raises(EntityNotFoundError, match="Entity 's1' not found in table 'sessions'") as excinfo:
            dao.require_by_id("s1")
        assert (excinfo.value.table, excinfo.value.entity_id) == ("sessions", "s1")

    def test_require_by_id_returns_stored_json_null(self, mock_kv_db: MagicMock):
        """
        Test that a stored JSON `null` counts as an existing entry.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        mock_kv_db.get_by_ids.return_value = [("s1", b"null")]
        dao = CommonKeyValueDao(mock_kv_db, "sessions", value_type="json")

        assert dao.require_by_id("s1") is None
        assert dao.get_by_id("s1") is None

    def test_save_json(self, mock_kv_db: MagicMock):
        """
        Test that JSON values are encoded to bytes and the expiry is passed through.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        dao = CommonKeyValueDao(mock_kv_db, "sessions", value_type="json")
        dao.save("s1", {"user": "u1"}, expire_at=1900000000)

        mock_kv_db.save_batch.assert_called_once_with(
            "sessions", [("s1", b'{"user": "u1"}')], expire_at=1900000000
        )

    def test_get_by_ids_and_streams_decode(self, mock_kv_db: MagicMock):
        """
        Test that batch reads and streams decode every value.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        dao = CommonKeyValueDao(mock_kv_db, "t", value_type="json")
        mock_kv_db.get_by_ids.return_value = [("a", b"1"), ("b", b"[2]")]
        mock_kv_db.stream_values.return_value = iter([b"1", b"2"])
        mock_kv_db.stream_entries.return_value = iter([("a", b'"x"')])
        mock_kv_db.stream_ids.return_value = iter(["a"])

        assert dao.get_by_ids(["a", "b"]) == [("a", 1), ("b", [2])]
        assert list(dao.stream_values(limit=2)) == [1, 2]
        assert list(dao.stream_entries()) == [("a", "x")]
        assert list(dao.stream_ids(5)) == ["a"]
        mock_kv_db.stream_values.assert_called_once_with("t", 2)
        mock_kv_db.stream_ids.assert_called_once_with("t", 5)

    def test_delete_count_and_create(self, mock_kv_db: MagicMock):
        """
        Test the calls that are forwarded with the bound table.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        mock_kv_db.count.return_value = 3
        dao = CommonKeyValueDao(mock_kv_db, "t")

        dao.create_table(drop_if_exists=True)
        dao.delete_by_id("a")
        assert dao.count() == 3

        mock_kv_db.create_table.assert_called_once_with("t", drop_if_exists=True)
        mock_kv_db.delete_by_ids.assert_called_once_with("t", ["a"])
        mock_kv_db.count.assert_called_once_with("t")

    def test_increment(self, mock_kv_db: MagicMock):
        """
        Test that `increment` returns the new value of a single counter.

        Args:
            mock_kv_db: A mocked key-value database.
        """
        mock_kv_db.increment_batch.return_value = [("hits", 5)]
        dao = CommonKeyValueDao(mock_kv_db, "counters")

        assert dao.increment("hits", by=2) == 5
        mock_kv_db.increment_batch.assert_called_once_with("counters", [("hits", 2)])
