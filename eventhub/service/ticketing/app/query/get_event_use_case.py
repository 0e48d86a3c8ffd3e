from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.exception.exceptions import NotFoundError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo


class GetEventUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> dict:
        event = await self.event_query_repo.get_by_id_with_organizer(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        return event
