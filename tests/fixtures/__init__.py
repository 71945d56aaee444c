"""Fixtures shared across the redisdb test suite, loaded via `pytest_plugins`."""
