"""
Integration tests for /auth: signup, login (token + cookie), logout, me
"""

from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient

from eventhub.platform.config.core_setting import settings


def test_signup_returns_camel_case_user(client: TestClient) -> None:
    response = client.post(
        '/auth/signup',
        json={'email': 'jane@example.com', 'password': 'secret123', 'name': 'Jane'},
    )

    assert response.status_code == 201
    body = response.json()
    assert body['email'] == 'jane@example.com'
    assert body['role'] == 'user'
    assert 'createdAt' in body
    assert 'password' not in body
    assert 'hashedPassword' not in body


def test_signup_as_organizer(signup_user: Callable[..., dict[str, Any]]) -> None:
    assert signup_user(email='org@example.com', role='organizer')['role'] == 'organizer'


def test_signup_cannot_pick_admin_role(client: TestClient) -> None:
    response = client.post(
        '/auth/signup',
        json={'email': 'x@example.com', 'password': 'secret123', 'name': 'X', 'role': 'admin'},
    )

    assert response.status_code == 400


def test_signup_duplicate_email_conflicts(
    client: TestClient, signup_user: Callable[..., dict[str, Any]]
) -> None:
    signup_user(email='dup@example.com')

    response = client.post(
        '/auth/signup',
        json={'email': 'dup@example.com', 'password': 'secret123', 'name': 'Again'},
    )

    assert response.status_code == 409
    assert 'already exists' in response.json()['detail']


def test_signup_rejects_short_password(client: TestClient) -> None:
    response = client.post(
        '/auth/signup', json={'email': 'y@example.com', 'password': '123', 'name': 'Y'}
    )

    assert response.status_code == 400


def test_login_returns_token_and_sets_cookie(
    client: TestClient, signup_user: Callable[..., dict[str, Any]]
) -> None:
    signup_user(email='jane@example.com', name='Jane')

    response = client.post(
        '/auth/login', json={'email': 'jane@example.com', 'password': 'P@ssw0rd'}
    )

    assert response.status_code == 200
    body = response.json()
    assert body['token']
    assert body['user']['email'] == 'jane@example.com'
    assert settings.AUTH_COOKIE_NAME in response.cookies


def test_login_with_wrong_password(
    client: TestClient, signup_user: Callable[..., dict[str, Any]]
) -> None:
    signup_user(email='jane@example.com')

    response = client.post('/auth/login', json={'email': 'jane@example.com', 'password': 'nope'})

    assert response.status_code == 401
    assert response.json()['detail'] == 'Invalid credentials'


def test_login_with_unknown_email(client: TestClient) -> None:
    response = client.post(
        '/auth/login', json={'email': 'ghost@example.com', 'password': 'whatever'}
    )

    assert response.status_code == 401
    assert response.json()['detail'] == 'Invalid credentials'


def test_me_with_bearer_token(
    client: TestClient, user_headers: Callable[..., dict[str, str]]
) -> None:
    headers = user_headers('jane@example.com', name='Jane')

    response = client.get('/auth/me', headers=headers)

    assert response.status_code == 200
    assert response.json()['name'] == 'Jane'


def test_me_with_auth_cookie(
    client: TestClient, signup_user: Callable[..., dict[str, Any]]
) -> None:
    signup_user(email='jane@example.com')
    client.post('/auth/login', json={'email': 'jane@example.com', 'password': 'P@ssw0rd'})

    response = client.get('/auth/me')

    assert response.status_code == 200
    assert response.json()['email'] == 'jane@example.com'


def test_me_without_credentials(client: TestClient) -> None:
    response = client.get('/auth/me')

    assert response.status_code == 401
    assert response.json()['detail'] == 'Not authenticated'


def test_me_with_garbage_token(client: TestClient) -> None:
    response = client.get('/auth/me', headers={'Authorization': 'Bearer not-a-jwt'})

    assert response.status_code == 401
    assert response.json()['detail'] == 'Invalid token'


def test_logout_clears_cookie(
    client: TestClient, signup_user: Callable[..., dict[str, Any]]
) -> None:
    signup_user(email='jane@example.com')
    client.post('/auth/login', json={'email': 'jane@example.com', 'password': 'P@ssw0rd'})

    response = client.post('/auth/logout')

    assert response.status_code == 200
    assert response.json()['message'] == 'Logged out successfully'
    assert client.get('/auth/me').status_code == 401


def test_bootstrap_admin_can_log_in(client: TestClient, admin_headers: dict[str, str]) -> None:
    response = client.get('/auth/me', headers=admin_headers)

    assert response.status_code == 200
    assert response.json()['role'] == 'admin'
