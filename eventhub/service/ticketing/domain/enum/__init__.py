"""Ticketing Domain Enums"""

from eventhub.service.ticketing.domain.enum.event_category import EventCategory
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.domain.enum.notification_type import NotificationType

__all__ = ['EventCategory', 'EventStatus', 'NotificationType']
