"""
Notification Event Handler

Consumes the booking domain events and appends the matching message to the
booker's notification log. Runs after the booking transaction has committed,
in its own session; a failure here never affects the booking.
"""

from eventhub.platform.event.in_memory_domain_event_bus import InMemoryDomainEventBus
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from eventhub.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingConfirmedEvent,
)
from eventhub.service.ticketing.domain.entity.notification_entity import NotificationEntity


class NotificationEventHandler:
    def __init__(self, *, notification_command_repo: INotificationCommandRepo) -> None:
        self.notification_command_repo = notification_command_repo

    def subscribe_to(self, bus: InMemoryDomainEventBus) -> None:
        bus.subscribe(event_type=BookingConfirmedEvent, handler=self.handle_booking_confirmed)
        bus.subscribe(event_type=BookingCancelledEvent, handler=self.handle_booking_cancelled)

    @Logger.io
    async def handle_booking_confirmed(self, event: BookingConfirmedEvent) -> None:
        await self.notification_command_repo.create(
            notification=NotificationEntity.booking_confirmed(
                user_id=event.user_id, event_title=event.event_title
            )
        )
        Logger.base.info(
            f'🔔 [NOTIFICATION] Booking {event.booking_id} confirmed → user {event.user_id}'
        )

    @Logger.io
    async def handle_booking_cancelled(self, event: BookingCancelledEvent) -> None:
        await self.notification_command_repo.create(
            notification=NotificationEntity.booking_cancelled(
                user_id=event.user_id, event_title=event.event_title
            )
        )
        Logger.base.info(
            f'🔔 [NOTIFICATION] Booking {event.booking_id} cancelled → user {event.user_id}'
        )
