"""Fixtures for infrastructure unit tests."""

from tests.shared.fixtures.sqlite import (  # noqa: F401
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)
