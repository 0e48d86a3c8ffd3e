from datetime import datetime
from typing import List, Optional

from eventhub.service.ticketing.domain.enum.notification_type import NotificationType
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    message: str
    type: NotificationType
    read: bool
    created_at: Optional[datetime] = None


class NotificationListResponse(CamelModel):
    notifications: List[NotificationResponse]
    total_pages: int
    current_page: int
    total: int


class UnreadCountResponse(CamelModel):
    count: int
