from datetime import date
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork
from eventhub.platform.exception.exceptions import InternalError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.entity.event_entity import EventEntity
from eventhub.service.ticketing.domain.enum.event_category import EventCategory
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.domain.value_object.principal import Principal


class CreateEventUseCase:
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
    async def create_event(
        self,
        *,
        principal: Principal,
        title: str,
        description: str,
        date: date,
        time: str,
        location: str,
        price: Decimal,
        available_tickets: int,
        category: EventCategory = EventCategory.OTHER,
        status: EventStatus = EventStatus.UPCOMING,
        image: Optional[str] = None,
    ) -> dict:
        AccessPolicy.authorize(principal, Operation.MANAGE_EVENTS)

        # The requested ticket count is both the capacity and the starting availability
        event = EventEntity.create(
            title=title,
            description=description,
            date=date,
            time=time,
            location=location,
            organizer_id=principal.id,
            price=price,
            capacity=available_tickets,
            category=category,
            status=status,
            image=image,
        )

        async with self.uow:
            created = await self.uow.event_command_repo.create(event=event)
            await self.uow.commit()

        Logger.base.info(
            f'🎪 [CREATE-EVENT] Event {created.id} "{created.title}" created by '
            f'{principal.role} {principal.id} with {created.total_tickets} tickets'
        )

        details = await self.event_query_repo.get_by_id_with_organizer(event_id=created.id)
        if details is None:
            raise InternalError(f'Event {created.id} vanished after commit')
        return details
