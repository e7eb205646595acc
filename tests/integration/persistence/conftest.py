"""Fixtures for repository tests against a real PostgreSQL container."""

from tests.shared.fixtures.database import (  # noqa: F401
    pg_engine,
    pg_session,
    postgres_container,
)
