"""Session-wide pytest setup.

Layout::

    tests/
    ├── unit/           hashing and token services, the account domain,
    │                   the auth workflow, SQLite repository, SMTP mail
    ├── integration/
    │   ├── api/        HTTP routes through TestClient on in-memory SQLite
    │   └── persistence/ PostgreSQL via testcontainers
    └── shared/         fixtures, fakes and factories

Tests marked ``integration`` need Docker and are skipped unless
``--run-integration`` (or ``RUN_INTEGRATION=1``) is given. ``--run-all`` /
``RUN_ALL_TESTS=1`` lifts every skip.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

for _candidate in (".env.dev", ".env"):
    if (_CONFIG_DIR / _candidate).exists():
        load_dotenv(_CONFIG_DIR / _candidate)
        break

# Secrets without defaults; the app module builds settings on import
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")

from hostel_config import clear_settings_cache  # noqa: E402

_TRUTHY = {"1", "true", "yes"}


def _env_enabled(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def pytest_addoption(parser):
    group = parser.getgroup("hostel")
    group.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="include tests marked integration (needs Docker)",
    )
    group.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="do not skip any marked test",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: runs against a PostgreSQL container, skipped by default",
    )


def pytest_collection_modifyitems(config, items):
    enabled = (
        config.getoption("--run-all")
        or config.getoption("--run-integration")
        or _env_enabled("RUN_ALL_TESTS")
        or _env_enabled("RUN_INTEGRATION")
    )
    if enabled:
        return

    marker = pytest.mark.skip(reason="needs --run-integration or RUN_INTEGRATION=1")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(marker)


@pytest.fixture(scope="session", autouse=True)
def _fresh_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()
