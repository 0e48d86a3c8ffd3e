from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork
from eventhub.platform.exception.exceptions import NotFoundError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.entity.event_entity import EventEntity
from eventhub.service.ticketing.domain.value_object.principal import Principal


class UpdateEventUseCase:
    """
    Partial event update by its organizer or an admin

    A new availableTickets value is applied as a single statement that moves
    capacity by the same delta, so tickets already sold stay accounted for even
    while bookings run concurrently. Events the caller does not own are reported
    as missing.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, event_query_repo: IEventQueryRepo) -> None:
        self.uow = uow
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(uow=uow, event_query_repo=event_query_repo)

    @Logger.io
    async def update_event(
        self, *, principal: Principal, event_id: int, changes: Dict[str, Any]
    ) -> dict:
        AccessPolicy.authorize(principal, Operation.MANAGE_EVENTS)
        EventEntity.validate_changes(changes)

        column_changes = dict(changes)
        available_tickets = column_changes.pop('available_tickets', None)
        organizer_id = AccessPolicy.event_owner_filter(principal)

        async with self.uow:
            found = await self.uow.event_command_repo.update(
                event_id=event_id, organizer_id=organizer_id, changes=column_changes
            )
            if not found:
                raise NotFoundError('Event not found')

            if available_tickets is not None:
                await self.uow.event_command_repo.set_available_tickets(
                    event_id=event_id,
                    organizer_id=organizer_id,
                    available_tickets=available_tickets,
                )

            await self.uow.commit()

        Logger.base.info(
            f'✏️ [UPDATE-EVENT] Event {event_id} updated by {principal.role} {principal.id}: '
            f'{sorted(changes)}'
        )

        details = await self.event_query_repo.get_by_id_with_organizer(event_id=event_id)
        if details is None:
            raise NotFoundError('Event not found')
        return details
