from typing import AsyncContextManager, Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from eventhub.service.ticketing.driven_adapter.model.booking_model import BookingModel
from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel


def booking_model_to_dict(db_booking: BookingModel) -> dict:
    """Booking row plus the user/event display fields; either side may be gone"""
    user = db_booking.user
    event = db_booking.event
    return {
        'id': db_booking.id,
        'user_id': db_booking.user_id,
        'event_id': db_booking.event_id,
        'tickets_booked': db_booking.tickets_booked,
        'total_amount': db_booking.total_amount,
        'status': db_booking.status,
        'booking_date': db_booking.booking_date,
        'updated_at': db_booking.updated_at,
        'user': {'id': user.id, 'name': user.name, 'email': user.email} if user else None,
        'event': {
            'id': event.id,
            'title': event.title,
            'date': event.date,
            'time': event.time,
            'location': event.location,
            'price': event.price,
            'status': event.status,
            'organizer_id': event.organizer_id,
        }
        if event
        else None,
    }


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[dict]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            db_booking = result.scalar_one_or_none()
            return booking_model_to_dict(db_booking) if db_booking else None

    @Logger.io
    async def list_with_details(
        self, *, user_id: Optional[int] = None, organizer_id: Optional[int] = None
    ) -> List[dict]:
        stmt = select(BookingModel).order_by(
            BookingModel.booking_date.desc(), BookingModel.id.desc()
        )
        if user_id is not None:
            stmt = stmt.where(BookingModel.user_id == user_id)
        if organizer_id is not None:
            stmt = stmt.join(EventModel, EventModel.id == BookingModel.event_id).where(
                EventModel.organizer_id == organizer_id
            )

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [booking_model_to_dict(db_booking) for db_booking in result.scalars().all()]
