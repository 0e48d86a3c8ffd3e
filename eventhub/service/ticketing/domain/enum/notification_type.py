from enum import StrEnum


class NotificationType(StrEnum):
    BOOKING = 'booking'
    EVENT = 'event'
    SYSTEM = 'system'
