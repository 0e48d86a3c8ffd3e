"""
Booking Domain Events

Raised by the booking coordinator after its transaction has committed and
consumed by the notification handler.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import attrs

from eventhub.service.ticketing.domain.entity.booking_entity import Booking


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@attrs.define(frozen=True)
class BookingConfirmedEvent:
    """Fired once a booking and its inventory deduction are committed"""

    booking_id: UUID
    user_id: int
    event_id: int
    event_title: str
    tickets_booked: int
    total_amount: Decimal
    occurred_at: datetime = attrs.field(factory=_utcnow)

    @classmethod
    def from_booking(cls, *, booking: Booking, event_title: str) -> 'BookingConfirmedEvent':
        return cls(
            booking_id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            event_title=event_title,
            tickets_booked=booking.tickets_booked,
            total_amount=booking.total_amount,
        )


@attrs.define(frozen=True)
class BookingCancelledEvent:
    """Fired once a cancellation and its inventory release are committed"""

    booking_id: UUID
    user_id: int
    event_id: int
    event_title: str
    tickets_released: int
    occurred_at: datetime = attrs.field(factory=_utcnow)

    @classmethod
    def from_booking(cls, *, booking: Booking, event_title: str) -> 'BookingCancelledEvent':
        return cls(
            booking_id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            event_title=event_title,
            tickets_released=booking.tickets_booked,
        )
