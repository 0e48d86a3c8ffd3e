from abc import ABC, abstractmethod
from typing import List, Tuple

from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity


class INotificationQueryRepo(ABC):
    @abstractmethod
    async def list_for_user(
        self, *, user_id: int, page: int, limit: int
    ) -> Tuple[List[NotificationEntity], int]:
        """Newest first; returns (page of notifications, total)"""
        pass

    @abstractmethod
    async def count_unread(self, *, user_id: int) -> int:
        pass
