"""
Unit tests for UpdateEventUseCase

Test Focus:
1. Column changes and the availability change go through separate statements
2. Organizers are restricted to their own events (reported as missing otherwise)
3. Invalid partial updates are rejected before touching the store
"""

from unittest.mock import AsyncMock, Mock

import pytest

from eventhub.platform.database.unit_of_work import AbstractUnitOfWork
from eventhub.platform.exception.exceptions import ForbiddenError, NotFoundError, ValidationError
from eventhub.service.ticketing.app.command.update_event_use_case import UpdateEventUseCase
from eventhub.service.ticketing.domain.entity.user_entity import UserRole
from eventhub.service.ticketing.domain.value_object.principal import Principal


ORGANIZER = Principal(id=10, role=UserRole.ORGANIZER)
ADMIN = Principal(id=1, role=UserRole.ADMIN)


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock()
        self.event_command_repo = AsyncMock()
        self.committed = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        pass


@pytest.mark.unit
class TestUpdateEvent:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.event_command_repo.update = AsyncMock(return_value=True)
        return uow

    @pytest.fixture
    def event_query_repo(self) -> Mock:
        repo = AsyncMock()
        repo.get_by_id_with_organizer = AsyncMock(return_value={'id': 1})
        return repo

    @pytest.fixture
    def use_case(self, uow: FakeUnitOfWork, event_query_repo: Mock) -> UpdateEventUseCase:
        return UpdateEventUseCase(uow=uow, event_query_repo=event_query_repo)

    @pytest.mark.asyncio
    async def test_organizer_update_is_scoped_to_own_events(
        self, use_case: UpdateEventUseCase, uow: FakeUnitOfWork
    ) -> None:
        # Act
        await use_case.update_event(
            principal=ORGANIZER, event_id=1, changes={'title': 'New', 'available_tickets': 7}
        )

        # Assert
        uow.event_command_repo.update.assert_awaited_once_with(
            event_id=1, organizer_id=ORGANIZER.id, changes={'title': 'New'}
        )
        uow.event_command_repo.set_available_tickets.assert_awaited_once_with(
            event_id=1, organizer_id=ORGANIZER.id, available_tickets=7
        )
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_admin_update_is_unscoped(
        self, use_case: UpdateEventUseCase, uow: FakeUnitOfWork
    ) -> None:
        # Act
        await use_case.update_event(principal=ADMIN, event_id=1, changes={'location': 'Hall B'})

        # Assert
        assert uow.event_command_repo.update.call_args.kwargs['organizer_id'] is None
        uow.event_command_repo.set_available_tickets.assert_not_called()

    @pytest.mark.asyncio
    async def test_event_of_another_organizer_is_not_found(
        self, use_case: UpdateEventUseCase, uow: FakeUnitOfWork
    ) -> None:
        # Arrange
        uow.event_command_repo.update = AsyncMock(return_value=False)

        # Act & Assert
        with pytest.raises(NotFoundError, match='Event not found'):
            await use_case.update_event(principal=ORGANIZER, event_id=1, changes={'title': 'X'})
        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(
        self, use_case: UpdateEventUseCase, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(ForbiddenError):
            await use_case.update_event(
                principal=Principal(id=3, role=UserRole.USER), event_id=1, changes={'title': 'X'}
            )
        uow.event_command_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_negative_availability_is_rejected(
        self, use_case: UpdateEventUseCase, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(ValidationError, match='available_tickets cannot be negative'):
            await use_case.update_event(
                principal=ORGANIZER, event_id=1, changes={'available_tickets': -1}
            )
        uow.event_command_repo.update.assert_not_called()
