"""
Booking Command Repository Implementation

Bound to the unit of work's session: the ledger insert/transition commits or
rolls back together with the event counter change issued in the same unit.
"""

from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from eventhub.service.ticketing.domain.entity.booking_entity import Booking, BookingStatus
from eventhub.service.ticketing.driven_adapter.model.booking_model import BookingModel


_booking_table = BookingModel.__table__


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _row_to_entity(row: Mapping[str, Any]) -> Booking:
        return Booking(
            id=row['id'],
            user_id=row['user_id'],
            event_id=row['event_id'],
            tickets_booked=row['tickets_booked'],
            total_amount=row['total_amount'],
            status=BookingStatus(row['status']),
            booking_date=row['booking_date'],
            updated_at=row['updated_at'],
        )

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        model = BookingModel(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            tickets_booked=booking.tickets_booked,
            total_amount=booking.total_amount,
            status=booking.status.value,
            booking_date=booking.booking_date,
            updated_at=booking.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(_booking_table).where(_booking_table.c.id == booking_id)
        )
        row = result.mappings().one_or_none()
        return self._row_to_entity(row) if row else None

    @Logger.io
    async def mark_cancelled_if_confirmed(self, *, booking_id: UUID) -> Optional[Booking]:
        # The status guard makes the transition happen at most once, even when two
        # cancellations of the same booking race each other
        stmt = (
            update(_booking_table)
            .where(
                _booking_table.c.id == booking_id,
                _booking_table.c.status == BookingStatus.CONFIRMED.value,
            )
            .values(status=BookingStatus.CANCELLED.value)
            .returning(*_booking_table.columns)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._row_to_entity(row) if row else None
