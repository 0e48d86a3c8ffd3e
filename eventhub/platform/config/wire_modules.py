"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from eventhub.service.ticketing.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_event_use_case,
    delete_event_use_case,
    mark_notification_read_use_case,
    update_event_use_case,
)
from eventhub.service.ticketing.app.query import (
    dashboard_use_case,
    get_booking_use_case,
    get_event_use_case,
    list_bookings_use_case,
    list_events_use_case,
    list_notifications_use_case,
    user_query_use_case,
)
from eventhub.service.ticketing.driving_adapter.http_controller import user_controller
from eventhub.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    mark_notification_read_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_event_use_case,
    list_events_use_case,
    list_notifications_use_case,
    dashboard_use_case,
    user_query_use_case,
    user_controller,
    role_auth,
]
