"""Pytest fixtures for API integration tests.

The app runs against in-memory SQLite with a recording mail dispatcher
and a controllable clock, so codes and reset links can be read back and
expiry can be simulated.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from hostel.presentation.api.app import API_V1_PREFIX, create_app
from hostel.presentation.api.config import get_api_settings
from hostel.presentation.api.dependencies import (
    get_clock,
    get_db_session,
    get_mail_dispatcher,
)
from hostel_config.settings import Settings
from tests.shared.fixtures.factories import (
    T0,
    TEST_EMAIL,
    TEST_PASSWORD,
    registration_payload,
)
from tests.shared.fixtures.fakes import FakeClock, RecordingMailDispatcher
from tests.shared.fixtures.sqlite import (  # noqa: F401
    sqlite_engine,
    sqlite_session_maker,
)

FRONTEND_URL = "http://hostel.test"


@pytest.fixture
def auth_url() -> str:
    return f"{API_V1_PREFIX}/auth"


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        api_cors_origins="http://localhost:5173",
        api_cookie_secure=False,  # Allow HTTP in tests
        bcrypt_rounds=4,
        frontend_base_url=FRONTEND_URL,
        smtp_enabled=False,
    )


@pytest.fixture
def mail() -> RecordingMailDispatcher:
    return RecordingMailDispatcher()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture
def test_client(api_settings, sqlite_session_maker, mail, clock) -> TestClient:
    """Create a test client with an in-memory database."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with sqlite_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_mail_dispatcher] = lambda: mail
    app.dependency_overrides[get_clock] = lambda: clock

    return TestClient(app)


@pytest.fixture
def registered(test_client, auth_url, mail) -> int:
    """Register an unverified account and return the e-mailed code."""
    response = test_client.post(f"{auth_url}/register", json=registration_payload())
    assert response.status_code == 200
    return mail.last_code


@pytest.fixture
def session_token(test_client, auth_url, registered) -> str:
    """Verify the registered account and return its session token."""
    response = test_client.post(
        f"{auth_url}/otp/verify",
        json={"email": TEST_EMAIL, "otp": registered},
    )
    assert response.status_code == 200
    # Drop the cookie so each test chooses how to authenticate
    test_client.cookies.clear()
    return response.json()["token"]


@pytest.fixture
def auth_headers(session_token) -> dict:
    return {"Authorization": f"Bearer {session_token}"}


@pytest.fixture
def credentials() -> dict:
    return {"email": TEST_EMAIL, "password": TEST_PASSWORD}
