from typing import Any, AsyncContextManager, Callable, Mapping, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity
from eventhub.service.ticketing.domain.enum.notification_type import NotificationType
from eventhub.service.ticketing.driven_adapter.model.notification_model import NotificationModel


_notification_table = NotificationModel.__table__


def notification_row_to_entity(row: Mapping[str, Any]) -> NotificationEntity:
    return NotificationEntity(
        id=row['id'],
        user_id=row['user_id'],
        message=row['message'],
        type=NotificationType(row['type']),
        read=row['read'],
        created_at=row['created_at'],
    )


class NotificationCommandRepoImpl(INotificationCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, notification: NotificationEntity) -> NotificationEntity:
        async with self.session_factory() as session:
            model = NotificationModel(
                user_id=notification.user_id,
                message=notification.message,
                type=notification.type.value,
                read=notification.read,
            )
            if notification.created_at is not None:
                model.created_at = notification.created_at

            session.add(model)
            await session.commit()

            return NotificationEntity(
                id=model.id,
                user_id=model.user_id,
                message=model.message,
                type=NotificationType(model.type),
                read=model.read,
                created_at=model.created_at,
            )

    @Logger.io
    async def mark_read(
        self, *, notification_id: int, user_id: int
    ) -> Optional[NotificationEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                update(_notification_table)
                .where(
                    _notification_table.c.id == notification_id,
                    _notification_table.c.user_id == user_id,
                )
                .values(read=True)
                .returning(*_notification_table.columns)
            )
            row = result.mappings().one_or_none()
            await session.commit()
            return notification_row_to_entity(row) if row else None

    @Logger.io
    async def mark_all_read(self, *, user_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                update(_notification_table)
                .where(
                    _notification_table.c.user_id == user_id,
                    _notification_table.c.read.is_(False),
                )
                .values(read=True)
            )
            await session.commit()
            return result.rowcount
