"""
Integration tests for /notifications: booking events land in the booker's log
"""

from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient
import pytest


@pytest.fixture
def buyer_headers(user_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return user_headers('buyer@example.com')


@pytest.fixture
def booking(
    client: TestClient,
    create_event: Callable[..., dict[str, Any]],
    user_headers: Callable[..., dict[str, str]],
    buyer_headers: dict[str, str],
) -> dict[str, Any]:
    event = create_event(user_headers('organizer@example.com', role='organizer'))
    response = client.post(
        '/bookings', json={'eventId': event['id'], 'ticketsBooked': 1}, headers=buyer_headers
    )
    assert response.status_code == 201
    return response.json()


def test_booking_confirmation_creates_unread_notification(
    client: TestClient, buyer_headers: dict[str, str], booking: dict[str, Any]
) -> None:
    body = client.get('/notifications', headers=buyer_headers).json()

    assert body['total'] == 1
    assert body['currentPage'] == 1
    notification = body['notifications'][0]
    assert notification['message'] == 'Your booking for "Summer Jazz Night" has been confirmed!'
    assert notification['type'] == 'booking'
    assert notification['read'] is False
    assert client.get('/notifications/unread-count', headers=buyer_headers).json() == {'count': 1}


def test_cancellation_adds_a_newer_notification(
    client: TestClient, buyer_headers: dict[str, str], booking: dict[str, Any]
) -> None:
    client.put(f'/bookings/{booking["id"]}/cancel', headers=buyer_headers)

    body = client.get('/notifications', headers=buyer_headers).json()

    assert body['total'] == 2
    assert body['notifications'][0]['message'] == (
        'Your booking for "Summer Jazz Night" has been cancelled.'
    )


def test_notifications_are_private(
    client: TestClient, user_headers: Callable[..., dict[str, str]], booking: dict[str, Any]
) -> None:
    other = user_headers('other@example.com')

    assert client.get('/notifications', headers=other).json()['total'] == 0


def test_mark_one_read(
    client: TestClient, buyer_headers: dict[str, str], booking: dict[str, Any]
) -> None:
    notification_id = client.get('/notifications', headers=buyer_headers).json()[
        'notifications'
    ][0]['id']

    response = client.put(f'/notifications/{notification_id}/read', headers=buyer_headers)

    assert response.status_code == 200
    assert response.json()['read'] is True
    assert client.get('/notifications/unread-count', headers=buyer_headers).json()['count'] == 0


def test_cannot_mark_someone_elses_notification(
    client: TestClient,
    buyer_headers: dict[str, str],
    user_headers: Callable[..., dict[str, str]],
    booking: dict[str, Any],
) -> None:
    notification_id = client.get('/notifications', headers=buyer_headers).json()[
        'notifications'
    ][0]['id']

    response = client.put(
        f'/notifications/{notification_id}/read', headers=user_headers('other@example.com')
    )

    assert response.status_code == 404
    assert response.json()['detail'] == 'Notification not found'


def test_mark_all_read(
    client: TestClient, buyer_headers: dict[str, str], booking: dict[str, Any]
) -> None:
    client.put(f'/bookings/{booking["id"]}/cancel', headers=buyer_headers)

    response = client.put('/notifications/mark-all-read', headers=buyer_headers)

    assert response.status_code == 200
    assert response.json()['message'] == 'All notifications marked as read'
    assert client.get('/notifications/unread-count', headers=buyer_headers).json()['count'] == 0


def test_notifications_require_authentication(client: TestClient) -> None:
    assert client.get('/notifications').status_code == 401
