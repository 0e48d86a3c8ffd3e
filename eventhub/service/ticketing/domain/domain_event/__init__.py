from eventhub.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingConfirmedEvent,
)

__all__ = ['BookingCancelledEvent', 'BookingConfirmedEvent']
