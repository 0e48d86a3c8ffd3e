import math
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class ListEventsUseCase:
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
    async def list_public(
        self,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        """Upcoming events for the public catalogue, soonest first"""
        events, total = await self.event_query_repo.list_upcoming_public(
            category=category, search=search, page=page, limit=limit
        )

        Logger.base.info(
            f'🌟 [LIST-PUBLIC] page {page}: {len(events)} of {total} upcoming event(s) '
            f'(category={category!r}, search={search!r})'
        )
        return {
            'events': events,
            'total_pages': math.ceil(total / limit) if limit else 0,
            'current_page': page,
            'total': total,
        }

    @Logger.io
    async def list_managed(self, *, principal: Principal) -> List[dict]:
        """Organizers see their own events, admins see every event"""
        AccessPolicy.authorize(principal, Operation.MANAGE_EVENTS)

        events = await self.event_query_repo.list_managed(
            organizer_id=AccessPolicy.event_owner_filter(principal)
        )

        Logger.base.info(
            f'📋 [LIST-MANAGED] Found {len(events)} events '
            f'for {principal.role} {principal.id}'
        )
        return events
