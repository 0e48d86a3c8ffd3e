"""
Integration tests for /bookings: create, list by role, view, cancel
"""

from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient
import pytest


@pytest.fixture
def organizer_headers(user_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return user_headers('organizer@example.com', role='organizer')


@pytest.fixture
def buyer_headers(user_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return user_headers('buyer@example.com', name='Bob Buyer')


@pytest.fixture
def event(
    create_event: Callable[..., dict[str, Any]], organizer_headers: dict[str, str]
) -> dict[str, Any]:
    return create_event(organizer_headers, availableTickets=5, price=20.0)


def book(
    client: TestClient, headers: dict[str, str], event_id: int, tickets: int
) -> dict[str, Any]:
    response = client.post(
        '/bookings', json={'eventId': event_id, 'ticketsBooked': tickets}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_booking(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any]
) -> None:
    """
    Given: an event with 5 tickets at 20.00
    When: a user books 2 tickets
    Then: 201 with a confirmed booking of 40.00 and 3 tickets left on the event
    """
    # Act
    booking = book(client, buyer_headers, event['id'], 2)

    # Assert
    assert booking['status'] == 'confirmed'
    assert booking['ticketsBooked'] == 2
    assert booking['totalAmount'] == 40.0
    assert booking['eventId'] == event['id']
    assert booking['event']['title'] == 'Summer Jazz Night'
    assert booking['user']['name'] == 'Bob Buyer'
    assert client.get(f'/events/{event["id"]}').json()['availableTickets'] == 3


def test_booking_more_than_available(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any]
) -> None:
    response = client.post(
        '/bookings', json={'eventId': event['id'], 'ticketsBooked': 6}, headers=buyer_headers
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'Not enough tickets available'
    assert client.get(f'/events/{event["id"]}').json()['availableTickets'] == 5


@pytest.mark.parametrize('tickets', [0, -2])
def test_booking_non_positive_quantity(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any], tickets: int
) -> None:
    response = client.post(
        '/bookings', json={'eventId': event['id'], 'ticketsBooked': tickets}, headers=buyer_headers
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'ticketsBooked must be at least 1'


def test_booking_unknown_event(client: TestClient, buyer_headers: dict[str, str]) -> None:
    response = client.post(
        '/bookings', json={'eventId': 999_999, 'ticketsBooked': 1}, headers=buyer_headers
    )

    assert response.status_code == 404
    assert response.json()['detail'] == 'Event not found'


def test_booking_cancelled_event(
    client: TestClient,
    buyer_headers: dict[str, str],
    create_event: Callable[..., dict[str, Any]],
    organizer_headers: dict[str, str],
) -> None:
    cancelled = create_event(organizer_headers, status='cancelled')

    response = client.post(
        '/bookings', json={'eventId': cancelled['id'], 'ticketsBooked': 1}, headers=buyer_headers
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'Event is not available for booking'


def test_booking_requires_authentication(client: TestClient, event: dict[str, Any]) -> None:
    response = client.post('/bookings', json={'eventId': event['id'], 'ticketsBooked': 1})

    assert response.status_code == 401


def test_list_bookings_is_scoped_by_role(
    client: TestClient,
    create_event: Callable[..., dict[str, Any]],
    user_headers: Callable[..., dict[str, str]],
    admin_headers: dict[str, str],
) -> None:
    """
    Given: two organizers' events and bookings by two users
    When: each role lists bookings
    Then: user sees own, organizer sees bookings on own events, admin sees all
    """
    # Arrange
    org_a = user_headers('org-a@example.com', role='organizer')
    org_b = user_headers('org-b@example.com', role='organizer')
    alice = user_headers('alice@example.com')
    carol = user_headers('carol@example.com')
    event_a = create_event(org_a, availableTickets=20)
    event_b = create_event(org_b, availableTickets=20)

    for _ in range(3):
        book(client, alice, event_a['id'], 1)
    book(client, alice, event_b['id'], 1)
    book(client, carol, event_a['id'], 1)
    book(client, carol, event_a['id'], 1)
    for _ in range(2):
        book(client, carol, event_b['id'], 1)

    # Act
    alice_list = client.get('/bookings', headers=alice).json()
    org_a_list = client.get('/bookings', headers=org_a).json()
    admin_list = client.get('/bookings', headers=admin_headers).json()

    # Assert
    assert len(alice_list) == 4
    assert len(org_a_list) == 5
    assert {b['eventId'] for b in org_a_list} == {event_a['id']}
    assert len(admin_list) == 8


def test_list_bookings_newest_first(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any]
) -> None:
    first = book(client, buyer_headers, event['id'], 1)
    second = book(client, buyer_headers, event['id'], 1)

    ids = [b['id'] for b in client.get('/bookings', headers=buyer_headers).json()]

    assert ids == [second['id'], first['id']]


def test_view_booking_visibility(
    client: TestClient,
    buyer_headers: dict[str, str],
    organizer_headers: dict[str, str],
    user_headers: Callable[..., dict[str, str]],
    admin_headers: dict[str, str],
    event: dict[str, Any],
) -> None:
    booking = book(client, buyer_headers, event['id'], 1)
    url = f'/bookings/{booking["id"]}'

    assert client.get(url, headers=buyer_headers).status_code == 200
    assert client.get(url, headers=organizer_headers).status_code == 200
    assert client.get(url, headers=admin_headers).status_code == 200

    stranger = client.get(url, headers=user_headers('stranger@example.com'))
    assert stranger.status_code == 403
    other_org = client.get(url, headers=user_headers('other-org@example.com', role='organizer'))
    assert other_org.status_code == 403


def test_view_missing_booking(client: TestClient, buyer_headers: dict[str, str]) -> None:
    response = client.get(
        '/bookings/00000000-0000-0000-0000-000000000000', headers=buyer_headers
    )

    assert response.status_code == 404
    assert response.json()['detail'] == 'Booking not found'


def test_cancel_booking_restores_inventory(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any]
) -> None:
    # Arrange
    booking = book(client, buyer_headers, event['id'], 2)

    # Act
    response = client.put(f'/bookings/{booking["id"]}/cancel', headers=buyer_headers)

    # Assert
    assert response.status_code == 200
    assert response.json()['status'] == 'cancelled'
    assert client.get(f'/events/{event["id"]}').json()['availableTickets'] == 5


def test_cancel_twice_is_rejected(
    client: TestClient, buyer_headers: dict[str, str], event: dict[str, Any]
) -> None:
    booking = book(client, buyer_headers, event['id'], 2)
    client.put(f'/bookings/{booking["id"]}/cancel', headers=buyer_headers)

    response = client.put(f'/bookings/{booking["id"]}/cancel', headers=buyer_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Booking is already cancelled'
    assert client.get(f'/events/{event["id"]}').json()['availableTickets'] == 5


def test_cancel_someone_elses_booking(
    client: TestClient,
    buyer_headers: dict[str, str],
    organizer_headers: dict[str, str],
    user_headers: Callable[..., dict[str, str]],
    event: dict[str, Any],
) -> None:
    booking = book(client, buyer_headers, event['id'], 1)
    url = f'/bookings/{booking["id"]}/cancel'

    assert client.put(url, headers=user_headers('stranger@example.com')).status_code == 403
    # Event organizers can see the booking but not cancel it
    assert client.put(url, headers=organizer_headers).status_code == 403
    assert client.get(f'/events/{event["id"]}').json()['availableTickets'] == 4


def test_admin_cancels_any_booking(
    client: TestClient,
    buyer_headers: dict[str, str],
    admin_headers: dict[str, str],
    event: dict[str, Any],
) -> None:
    booking = book(client, buyer_headers, event['id'], 1)

    response = client.put(f'/bookings/{booking["id"]}/cancel', headers=admin_headers)

    assert response.status_code == 200
    assert response.json()['status'] == 'cancelled'
