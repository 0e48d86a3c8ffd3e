import math
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_notification_query_repo import (
    INotificationQueryRepo,
)
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class ListNotificationsUseCase:
    def __init__(self, notification_query_repo: INotificationQueryRepo) -> None:
        self.notification_query_repo = notification_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        notification_query_repo: INotificationQueryRepo = Depends(
            Provide[Container.notification_query_repo]
        ),
    ) -> Self:
        return cls(notification_query_repo=notification_query_repo)

    @Logger.io
    async def list_notifications(self, *, principal: Principal, page: int, limit: int) -> dict:
        AccessPolicy.authorize(principal, Operation.READ_NOTIFICATIONS)

        notifications, total = await self.notification_query_repo.list_for_user(
            user_id=principal.id, page=page, limit=limit
        )
        return {
            'notifications': notifications,
            'total_pages': math.ceil(total / limit) if limit else 0,
            'current_page': page,
            'total': total,
        }

    @Logger.io
    async def count_unread(self, *, principal: Principal) -> int:
        AccessPolicy.authorize(principal, Operation.READ_NOTIFICATIONS)
        return await self.notification_query_repo.count_unread(user_id=principal.id)
