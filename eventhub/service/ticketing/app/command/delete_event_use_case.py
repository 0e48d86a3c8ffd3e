from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork
from eventhub.platform.exception.exceptions import NotFoundError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class DeleteEventUseCase:
    """Bookings made for the event are kept; they simply lose the event's display fields"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_event(self, *, principal: Principal, event_id: int) -> None:
        AccessPolicy.authorize(principal, Operation.MANAGE_EVENTS)

        async with self.uow:
            deleted = await self.uow.event_command_repo.delete(
                event_id=event_id, organizer_id=AccessPolicy.event_owner_filter(principal)
            )
            if not deleted:
                raise NotFoundError('Event not found')
            await self.uow.commit()

        Logger.base.info(
            f'🗑️ [DELETE-EVENT] Event {event_id} deleted by {principal.role} {principal.id}'
        )
