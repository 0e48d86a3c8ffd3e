"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from eventhub.service.ticketing.driven_adapter.model.booking_model import BookingModel
from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel
from eventhub.service.ticketing.driven_adapter.model.notification_model import NotificationModel
from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'EventModel',
    'NotificationModel',
    'UserModel',
]
