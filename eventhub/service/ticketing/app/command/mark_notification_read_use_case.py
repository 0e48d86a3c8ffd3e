from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.exception.exceptions import NotFoundError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity
from eventhub.service.ticketing.domain.value_object.principal import Principal


class MarkNotificationReadUseCase:
    def __init__(self, *, notification_command_repo: INotificationCommandRepo) -> None:
        self.notification_command_repo = notification_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(notification_command_repo=notification_command_repo)

    @Logger.io
    async def mark_read(self, *, principal: Principal, notification_id: int) -> NotificationEntity:
        AccessPolicy.authorize(principal, Operation.READ_NOTIFICATIONS)

        # Scoped to the caller: someone else's notification is indistinguishable from a missing one
        notification = await self.notification_command_repo.mark_read(
            notification_id=notification_id, user_id=principal.id
        )
        if notification is None:
            raise NotFoundError('Notification not found')
        return notification

    @Logger.io
    async def mark_all_read(self, *, principal: Principal) -> int:
        AccessPolicy.authorize(principal, Operation.READ_NOTIFICATIONS)

        updated = await self.notification_command_repo.mark_all_read(user_id=principal.id)
        Logger.base.info(
            f'📭 [NOTIFICATION] Marked {updated} notification(s) read for user {principal.id}'
        )
        return updated
