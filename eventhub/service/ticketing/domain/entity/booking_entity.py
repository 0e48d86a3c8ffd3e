from datetime import datetime, timezone
from decimal import Decimal
from enum import StrEnum
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils import uuid7

from eventhub.platform.exception.exceptions import AlreadyCancelledError, ValidationError
from eventhub.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


def new_booking_id() -> UUID:
    """Time-ordered UUID7, converted to the stdlib type the ORM binds"""
    return UUID(str(uuid7()))


@attrs.define
class Booking:
    id: UUID
    user_id: int
    event_id: int
    tickets_booked: int
    total_amount: Decimal
    status: BookingStatus = BookingStatus.CONFIRMED
    booking_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        event_id: int,
        tickets_booked: int,
        unit_price: Decimal,
    ) -> 'Booking':
        if tickets_booked < 1:
            raise ValidationError('ticketsBooked must be at least 1')
        if unit_price < 0:
            raise ValidationError('price cannot be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=new_booking_id(),
            user_id=user_id,
            event_id=event_id,
            tickets_booked=tickets_booked,
            total_amount=Decimal(unit_price) * tickets_booked,
            status=BookingStatus.CONFIRMED,
            booking_date=now,
            updated_at=now,
        )

    @staticmethod
    def validate_tickets_requested(tickets_booked: int) -> None:
        if tickets_booked < 1:
            raise ValidationError('ticketsBooked must be at least 1')

    def ensure_cancellable(self) -> None:
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()
