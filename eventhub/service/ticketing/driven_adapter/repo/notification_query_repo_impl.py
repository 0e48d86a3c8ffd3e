from typing import AsyncContextManager, Callable, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_notification_query_repo import (
    INotificationQueryRepo,
)
from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity
from eventhub.service.ticketing.driven_adapter.model.notification_model import NotificationModel
from eventhub.service.ticketing.driven_adapter.repo.notification_command_repo_impl import (
    notification_row_to_entity,
)


_notification_table = NotificationModel.__table__


class NotificationQueryRepoImpl(INotificationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def list_for_user(
        self, *, user_id: int, page: int, limit: int
    ) -> Tuple[List[NotificationEntity], int]:
        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count())
                .select_from(_notification_table)
                .where(_notification_table.c.user_id == user_id)
            )
            result = await session.execute(
                select(_notification_table)
                .where(_notification_table.c.user_id == user_id)
                .order_by(_notification_table.c.created_at.desc(), _notification_table.c.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            notifications = [notification_row_to_entity(row) for row in result.mappings().all()]

        return notifications, total or 0

    @Logger.io
    async def count_unread(self, *, user_id: int) -> int:
        async with self.session_factory() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(_notification_table)
                .where(
                    _notification_table.c.user_id == user_id,
                    _notification_table.c.read.is_(False),
                )
            )
            return count or 0
