"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database (file-backed, so concurrent sessions really contend)
- Table reset per integration test
- A TestClient over the production app (lifespan wires DI, subscribes the
  notification handler and bootstraps the admin account)
- HTTP helpers for users, tokens and events

Architecture:
- Unit tests (@pytest.mark.unit): mocked collaborators, no database
- Integration tests: real SQLite database, cleaned before each test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (eventhub.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


TEST_DIR = Path(__file__).parent
TEST_DB_PATH = TEST_DIR / 'test_eventhub.db'

TEST_ADMIN_EMAIL = 'admin@example.com'
TEST_ADMIN_PASSWORD = 'admin-secret'
DEFAULT_PASSWORD = 'P@ssw0rd'


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB_PATH}'
    os.environ['AUTO_CREATE_TABLES'] = 'false'
    os.environ['ADMIN_EMAIL'] = TEST_ADMIN_EMAIL
    os.environ['ADMIN_PASSWORD'] = TEST_ADMIN_PASSWORD
    os.environ['BOOKING_RETRY_BASE_DELAY'] = '0.01'
    os.environ.setdefault('SECRET_KEY', 'test_secret_key')

    # Create test log directory
    test_log_dir = TEST_DIR / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from eventhub.platform.database.orm_db_setting import Base  # noqa: E402
import eventhub.service.ticketing.driven_adapter.model  # noqa: E402, F401


def _sync_engine():
    return create_engine(f'sqlite:///{TEST_DB_PATH}')


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    engine = _sync_engine()
    try:
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    TEST_DB_PATH.unlink(missing_ok=True)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers and 'integration' not in markers:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Database Cleanup
# =============================================================================
def _clean_all_tables() -> None:
    engine = _sync_engine()
    try:
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def clean_database(request: pytest.FixtureRequest) -> None:
    # Autouse fixtures run before the test's own fixtures, so the client's
    # lifespan (admin bootstrap) always sees an empty database
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        return
    _clean_all_tables()


# =============================================================================
# HTTP Client
# =============================================================================
@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from eventhub.service.ticketing.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def auth_header(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def signup_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Sign a user up and return the created user JSON"""

    def _signup(
        email: str, name: str = 'Test User', role: str = 'user', password: str = DEFAULT_PASSWORD
    ) -> dict[str, Any]:
        response = client.post(
            '/auth/signup',
            json={'email': email, 'password': password, 'name': name, 'role': role},
        )
        assert response.status_code == 201, f'Signup failed: {response.text}'
        return response.json()

    return _signup


@pytest.fixture
def login_token(client: TestClient) -> Callable[..., str]:
    """Log in and return the bearer token; the auth cookie is dropped again"""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> str:
        response = client.post('/auth/login', json={'email': email, 'password': password})
        assert response.status_code == 200, f'Login failed: {response.text}'
        client.cookies.clear()
        return response.json()['token']

    return _login


@pytest.fixture
def user_headers(
    signup_user: Callable[..., dict[str, Any]], login_token: Callable[..., str]
) -> Callable[..., dict[str, str]]:
    """Sign up a user with the given role and return its Authorization header"""

    def _headers(email: str, role: str = 'user', name: str = 'Test User') -> dict[str, str]:
        signup_user(email=email, name=name, role=role)
        return auth_header(login_token(email))

    return _headers


@pytest.fixture
def admin_headers(login_token: Callable[..., str]) -> dict[str, str]:
    return auth_header(login_token(TEST_ADMIN_EMAIL, TEST_ADMIN_PASSWORD))


@pytest.fixture
def create_event(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create an event as the given organizer/admin and return the event JSON"""

    def _create(headers: dict[str, str], **overrides: Any) -> dict[str, Any]:
        payload = {
            'title': 'Summer Jazz Night',
            'description': 'An evening of live jazz by the river',
            'date': '2030-07-12',
            'time': '19:30',
            'location': 'Riverside Park',
            'category': 'concert',
            'price': 20.0,
            'availableTickets': 5,
        }
        payload.update(overrides)
        response = client.post('/events', json=payload, headers=headers)
        assert response.status_code == 201, f'Event creation failed: {response.text}'
        return response.json()

    return _create
