from abc import ABC, abstractmethod
from typing import Optional

from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity


class INotificationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, notification: NotificationEntity) -> NotificationEntity:
        pass

    @abstractmethod
    async def mark_read(
        self, *, notification_id: int, user_id: int
    ) -> Optional[NotificationEntity]:
        """None when the notification does not exist or belongs to someone else"""
        pass

    @abstractmethod
    async def mark_all_read(self, *, user_id: int) -> int:
        pass
