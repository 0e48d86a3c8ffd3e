"""
Unit tests for the Booking and EventEntity domain rules
"""

from datetime import date
from decimal import Decimal

import pytest

from eventhub.platform.exception.exceptions import AlreadyCancelledError, ValidationError
from eventhub.service.ticketing.domain.entity.booking_entity import Booking, BookingStatus
from eventhub.service.ticketing.domain.entity.event_entity import EventEntity
from eventhub.service.ticketing.domain.enum.event_status import EventStatus


@pytest.mark.unit
class TestBookingEntity:
    def test_create_prices_booking_at_current_event_price(self) -> None:
        booking = Booking.create(
            user_id=1, event_id=2, tickets_booked=3, unit_price=Decimal('19.99')
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.total_amount == Decimal('59.97')
        assert booking.booking_date is not None

    def test_create_free_event(self) -> None:
        booking = Booking.create(user_id=1, event_id=2, tickets_booked=2, unit_price=Decimal('0'))

        assert booking.total_amount == Decimal('0')

    def test_ids_are_uuid7(self) -> None:
        first = Booking.create(user_id=1, event_id=2, tickets_booked=1, unit_price=Decimal('1'))
        second = Booking.create(user_id=1, event_id=2, tickets_booked=1, unit_price=Decimal('1'))

        assert first.id != second.id
        assert first.id.version == 7

    @pytest.mark.parametrize('tickets', [0, -3])
    def test_create_rejects_non_positive_quantity(self, tickets: int) -> None:
        with pytest.raises(ValidationError, match='ticketsBooked must be at least 1'):
            Booking.create(user_id=1, event_id=2, tickets_booked=tickets, unit_price=Decimal('5'))

    def test_confirmed_booking_is_cancellable(self) -> None:
        booking = Booking.create(user_id=1, event_id=2, tickets_booked=1, unit_price=Decimal('5'))

        booking.ensure_cancellable()

    def test_cancelled_booking_cannot_be_cancelled_again(self) -> None:
        booking = Booking.create(user_id=1, event_id=2, tickets_booked=1, unit_price=Decimal('5'))
        booking.status = BookingStatus.CANCELLED

        with pytest.raises(AlreadyCancelledError):
            booking.ensure_cancellable()


@pytest.mark.unit
class TestEventEntity:
    @pytest.fixture
    def event(self) -> EventEntity:
        return EventEntity.create(
            title='Tech Conf',
            description='Talks',
            date=date(2030, 1, 1),
            time='09:00',
            location='Hall A',
            organizer_id=1,
            price=Decimal('50'),
            capacity=100,
        )

    def test_new_event_starts_fully_available(self, event: EventEntity) -> None:
        assert event.available_tickets == 100
        assert event.total_tickets == 100
        assert event.status == EventStatus.UPCOMING
        assert event.is_bookable

    def test_only_upcoming_events_are_bookable(self, event: EventEntity) -> None:
        event.status = EventStatus.PAST
        assert not event.is_bookable

    def test_blank_title_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match='Event title cannot be empty'):
            EventEntity.create(
                title='   ',
                description='Talks',
                date=date(2030, 1, 1),
                time='09:00',
                location='Hall A',
                organizer_id=1,
                price=Decimal('50'),
                capacity=10,
            )

    def test_negative_capacity_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match='cannot be negative'):
            EventEntity.create(
                title='Tech Conf',
                description='Talks',
                date=date(2030, 1, 1),
                time='09:00',
                location='Hall A',
                organizer_id=1,
                price=Decimal('50'),
                capacity=-1,
            )

    @pytest.mark.parametrize(
        'changes,message',
        [
            ({'title': ''}, 'Event title cannot be empty'),
            ({'price': Decimal('-1')}, 'Event price cannot be negative'),
            ({'available_tickets': -5}, 'Event available_tickets cannot be negative'),
            ({'date': None}, 'Event date cannot be empty'),
        ],
    )
    def test_validate_changes(self, changes: dict, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            EventEntity.validate_changes(changes)

    def test_validate_changes_accepts_partial_update(self) -> None:
        EventEntity.validate_changes({'title': 'New title', 'available_tickets': 0})
