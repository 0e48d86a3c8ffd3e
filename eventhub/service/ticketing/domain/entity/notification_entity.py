from datetime import datetime, timezone
from typing import Optional

import attrs

from eventhub.service.ticketing.domain.enum.notification_type import NotificationType


@attrs.define
class NotificationEntity:
    user_id: int
    message: str
    type: NotificationType = NotificationType.BOOKING
    read: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def booking_confirmed(cls, *, user_id: int, event_title: str) -> 'NotificationEntity':
        return cls(
            user_id=user_id,
            message=f'Your booking for "{event_title}" has been confirmed!',
            type=NotificationType.BOOKING,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def booking_cancelled(cls, *, user_id: int, event_title: str) -> 'NotificationEntity':
        return cls(
            user_id=user_id,
            message=f'Your booking for "{event_title}" has been cancelled.',
            type=NotificationType.BOOKING,
            created_at=datetime.now(timezone.utc),
        )
