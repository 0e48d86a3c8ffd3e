"""
Unit tests for CreateBookingUseCase

Test Focus:
1. Happy path: conditional reservation → ledger insert → commit → BookingConfirmedEvent
2. Rejections: the failed reservation is classified by re-reading the event
   (missing → 404, not upcoming → 400, short on tickets → 400) and nothing is committed
3. Retry: transient store errors restart the transaction, persistent ones surface as 500
"""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from eventhub.platform.config.core_setting import settings
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork
from eventhub.platform.exception.exceptions import (
    InsufficientInventoryError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from eventhub.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from eventhub.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingConfirmedEvent,
)
from eventhub.service.ticketing.domain.entity.booking_entity import BookingStatus
from eventhub.service.ticketing.domain.entity.event_entity import EventEntity
from eventhub.service.ticketing.domain.enum.event_status import EventStatus


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock()
        self.event_command_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


def _operational_error() -> OperationalError:
    return OperationalError('UPDATE event', {}, Exception('database is locked'))


@pytest.mark.unit
class TestCreateBooking:
    @pytest.fixture
    def event_after_reservation(self) -> EventEntity:
        return EventEntity(
            id=1,
            title='Summer Jazz Night',
            description='Live jazz',
            date=date(2030, 7, 12),
            time='19:30',
            location='Riverside Park',
            organizer_id=10,
            price=Decimal('20.00'),
            available_tickets=3,
            total_tickets=5,
        )

    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        return FakeUnitOfWork()

    @pytest.fixture
    def mock_booking_query_repo(self) -> Mock:
        repo = AsyncMock()
        repo.get_by_id_with_details = AsyncMock(
            side_effect=lambda booking_id: {'id': booking_id, 'status': 'confirmed'}
        )
        return repo

    @pytest.fixture
    def mock_event_publisher(self) -> Mock:
        return AsyncMock()

    @pytest.fixture
    def use_case(
        self, uow: FakeUnitOfWork, mock_booking_query_repo: Mock, mock_event_publisher: Mock
    ) -> CreateBookingUseCase:
        return CreateBookingUseCase(
            uow=uow,
            booking_query_repo=mock_booking_query_repo,
            event_publisher=mock_event_publisher,
        )

    @pytest.mark.asyncio
    async def test_confirms_booking_with_total_from_event_price(
        self,
        use_case: CreateBookingUseCase,
        uow: FakeUnitOfWork,
        event_after_reservation: EventEntity,
        mock_event_publisher: Mock,
    ) -> None:
        """
        Given: an upcoming event priced 20.00 with enough tickets
        When: a user books 2 tickets
        Then:
          - the booking is inserted confirmed with totalAmount 40.00
          - the unit of work commits once
          - BookingConfirmedEvent carries the event title
        """
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(return_value=event_after_reservation)

        # Act
        result = await use_case.create_booking(user_id=7, event_id=1, tickets_booked=2)

        # Assert
        uow.event_command_repo.reserve_tickets.assert_awaited_once_with(event_id=1, quantity=2)
        booking = uow.booking_command_repo.create.call_args.kwargs['booking']
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.total_amount == Decimal('40.00')
        assert booking.user_id == 7
        assert isinstance(booking.id, UUID)
        assert uow.committed == 1
        assert result['id'] == booking.id

        event = mock_event_publisher.publish.call_args.kwargs['event']
        assert isinstance(event, BookingConfirmedEvent)
        assert event.event_title == 'Summer Jazz Night'
        assert event.tickets_booked == 2

    @pytest.mark.asyncio
    async def test_missing_event_is_not_found(
        self, use_case: CreateBookingUseCase, uow: FakeUnitOfWork, mock_event_publisher: Mock
    ) -> None:
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(return_value=None)
        uow.event_command_repo.get_by_id = AsyncMock(return_value=None)

        # Act & Assert
        with pytest.raises(NotFoundError, match='Event not found'):
            await use_case.create_booking(user_id=7, event_id=99, tickets_booked=1)

        uow.booking_command_repo.create.assert_not_called()
        assert uow.committed == 0
        mock_event_publisher.publish.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', [EventStatus.PAST, EventStatus.CANCELLED])
    async def test_event_not_upcoming_is_rejected(
        self,
        use_case: CreateBookingUseCase,
        uow: FakeUnitOfWork,
        event_after_reservation: EventEntity,
        status: EventStatus,
    ) -> None:
        # Arrange
        event_after_reservation.status = status
        uow.event_command_repo.reserve_tickets = AsyncMock(return_value=None)
        uow.event_command_repo.get_by_id = AsyncMock(return_value=event_after_reservation)

        # Act & Assert
        with pytest.raises(InvalidStateError, match='Event is not available for booking'):
            await use_case.create_booking(user_id=7, event_id=1, tickets_booked=1)
        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_not_enough_tickets_is_rejected(
        self,
        use_case: CreateBookingUseCase,
        uow: FakeUnitOfWork,
        event_after_reservation: EventEntity,
    ) -> None:
        """
        Given: an upcoming event with 3 tickets left
        When: a user asks for 4
        Then: InsufficientInventoryError, no booking row, no commit
        """
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(return_value=None)
        uow.event_command_repo.get_by_id = AsyncMock(return_value=event_after_reservation)

        # Act & Assert
        with pytest.raises(InsufficientInventoryError, match='Not enough tickets available'):
            await use_case.create_booking(user_id=7, event_id=1, tickets_booked=4)

        uow.booking_command_repo.create.assert_not_called()
        assert uow.committed == 0
        assert uow.rolled_back == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize('tickets', [0, -1])
    async def test_non_positive_ticket_count_never_touches_inventory(
        self, use_case: CreateBookingUseCase, uow: FakeUnitOfWork, tickets: int
    ) -> None:
        # Act & Assert
        with pytest.raises(ValidationError, match='ticketsBooked must be at least 1'):
            await use_case.create_booking(user_id=7, event_id=1, tickets_booked=tickets)

        uow.event_command_repo.reserve_tickets.assert_not_called()

    @pytest.mark.asyncio
    async def test_transient_error_is_retried(
        self,
        use_case: CreateBookingUseCase,
        uow: FakeUnitOfWork,
        event_after_reservation: EventEntity,
    ) -> None:
        """
        Given: the first reservation attempt hits a lock conflict
        When: the use case retries
        Then: the second attempt commits and only one booking is written
        """
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(
            side_effect=[_operational_error(), event_after_reservation]
        )

        # Act
        await use_case.create_booking(user_id=7, event_id=1, tickets_booked=2)

        # Assert
        assert uow.event_command_repo.reserve_tickets.await_count == 2
        uow.booking_command_repo.create.assert_awaited_once()
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(
        self, use_case: CreateBookingUseCase, uow: FakeUnitOfWork, mock_event_publisher: Mock
    ) -> None:
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(side_effect=_operational_error())

        # Act & Assert
        with pytest.raises(InternalError):
            await use_case.create_booking(user_id=7, event_id=1, tickets_booked=1)

        attempts = uow.event_command_repo.reserve_tickets.await_count
        assert attempts == settings.BOOKING_MAX_RETRIES + 1
        mock_event_publisher.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_transient_store_error_is_not_retried(
        self, use_case: CreateBookingUseCase, uow: FakeUnitOfWork
    ) -> None:
        # Arrange
        uow.event_command_repo.reserve_tickets = AsyncMock(
            side_effect=IntegrityError('UPDATE event', {}, Exception('constraint failed'))
        )

        # Act & Assert
        with pytest.raises(IntegrityError):
            await use_case.create_booking(user_id=7, event_id=1, tickets_booked=1)

        assert uow.event_command_repo.reserve_tickets.await_count == 1
