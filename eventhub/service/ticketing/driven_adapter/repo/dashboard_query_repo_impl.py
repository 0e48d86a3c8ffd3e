"""
Dashboard Query Repository Implementation

Aggregates are computed in the store with GROUP BY; only confirmed bookings
count towards revenue, sold tickets and popularity.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncContextManager, Callable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_dashboard_query_repo import IDashboardQueryRepo
from eventhub.service.ticketing.domain.entity.booking_entity import BookingStatus
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.driven_adapter.model.booking_model import BookingModel
from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel
from eventhub.service.ticketing.driven_adapter.model.notification_model import NotificationModel
from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel
from eventhub.service.ticketing.driven_adapter.repo.booking_query_repo_impl import (
    booking_model_to_dict,
)


RECENT_BOOKINGS_DAYS = 30
POPULAR_EVENTS_LIMIT = 10
ORGANIZER_RECENT_BOOKINGS_LIMIT = 10
USER_RECENT_BOOKINGS_LIMIT = 5

_confirmed = BookingModel.status == BookingStatus.CONFIRMED.value


def _money(value) -> float:
    return float(value or 0)


class DashboardQueryRepoImpl(IDashboardQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_admin_summary(self) -> dict:
        since = datetime.now(timezone.utc) - timedelta(days=RECENT_BOOKINGS_DAYS)
        booking_day = func.date(BookingModel.booking_date)

        async with self.session_factory() as session:
            total_users = await session.scalar(select(func.count()).select_from(UserModel))
            total_events = await session.scalar(select(func.count()).select_from(EventModel))
            total_bookings = await session.scalar(select(func.count()).select_from(BookingModel))
            total_revenue = await session.scalar(
                select(func.sum(BookingModel.total_amount)).where(_confirmed)
            )

            recent_rows = await session.execute(
                select(
                    booking_day.label('day'),
                    func.count(BookingModel.id).label('booking_count'),
                    func.sum(BookingModel.total_amount).label('revenue'),
                )
                .where(_confirmed, BookingModel.booking_date >= since)
                .group_by(booking_day)
                .order_by(booking_day.asc())
            )

            popular_rows = await session.execute(
                select(
                    EventModel.id,
                    EventModel.title,
                    func.count(BookingModel.id).label('total_bookings'),
                    func.sum(BookingModel.tickets_booked).label('total_tickets'),
                    func.sum(BookingModel.total_amount).label('total_revenue'),
                )
                .select_from(BookingModel)
                .join(EventModel, EventModel.id == BookingModel.event_id)
                .where(_confirmed)
                .group_by(EventModel.id, EventModel.title)
                .order_by(func.count(BookingModel.id).desc(), EventModel.id.asc())
                .limit(POPULAR_EVENTS_LIMIT)
            )

            user_rows = await session.execute(
                select(UserModel.role, func.count(UserModel.id))
                .group_by(UserModel.role)
                .order_by(UserModel.role)
            )
            event_rows = await session.execute(
                select(EventModel.category, func.count(EventModel.id))
                .group_by(EventModel.category)
                .order_by(EventModel.category)
            )

            return {
                'summary': {
                    'total_users': total_users or 0,
                    'total_events': total_events or 0,
                    'total_bookings': total_bookings or 0,
                    'total_revenue': _money(total_revenue),
                },
                'charts': {
                    'recent_bookings': [
                        {
                            'date': str(row.day),
                            'count': row.booking_count,
                            'revenue': _money(row.revenue),
                        }
                        for row in recent_rows
                    ],
                    'popular_events': [
                        {
                            'event_id': row.id,
                            'title': row.title,
                            'total_bookings': row.total_bookings,
                            'total_tickets': row.total_tickets or 0,
                            'total_revenue': _money(row.total_revenue),
                        }
                        for row in popular_rows
                    ],
                    'user_stats': [{'role': role, 'count': count} for role, count in user_rows],
                    'event_stats': [
                        {'category': category, 'count': count} for category, count in event_rows
                    ],
                },
            }

    @Logger.io
    async def get_organizer_summary(self, *, organizer_id: int) -> dict:
        own_event = EventModel.organizer_id == organizer_id

        per_event = (
            select(
                BookingModel.event_id.label('event_id'),
                func.count(BookingModel.id).label('total_bookings'),
                func.sum(BookingModel.tickets_booked).label('total_tickets_sold'),
            )
            .where(_confirmed)
            .group_by(BookingModel.event_id)
            .subquery()
        )

        async with self.session_factory() as session:
            total_events = await session.scalar(
                select(func.count()).select_from(EventModel).where(own_event)
            )
            upcoming_events = await session.scalar(
                select(func.count())
                .select_from(EventModel)
                .where(own_event, EventModel.status == EventStatus.UPCOMING.value)
            )
            booking_totals = (
                await session.execute(
                    select(func.count(BookingModel.id), func.sum(BookingModel.total_amount))
                    .select_from(BookingModel)
                    .join(EventModel, EventModel.id == BookingModel.event_id)
                    .where(own_event, _confirmed)
                )
            ).one()

            recent = await session.execute(
                select(BookingModel)
                .join(EventModel, EventModel.id == BookingModel.event_id)
                .where(own_event, _confirmed)
                .order_by(BookingModel.booking_date.desc(), BookingModel.id.desc())
                .limit(ORGANIZER_RECENT_BOOKINGS_LIMIT)
            )
            recent_bookings = [booking_model_to_dict(b) for b in recent.scalars().all()]

            event_rows = await session.execute(
                select(
                    EventModel.id,
                    EventModel.title,
                    EventModel.date,
                    EventModel.status,
                    EventModel.available_tickets,
                    func.coalesce(per_event.c.total_bookings, 0).label('total_bookings'),
                    func.coalesce(per_event.c.total_tickets_sold, 0).label('total_tickets_sold'),
                )
                .outerjoin(per_event, per_event.c.event_id == EventModel.id)
                .where(own_event)
                .order_by(EventModel.date.asc(), EventModel.id.asc())
            )

            return {
                'summary': {
                    'total_events': total_events or 0,
                    'upcoming_events': upcoming_events or 0,
                    'total_bookings': booking_totals[0] or 0,
                    'total_revenue': _money(booking_totals[1]),
                },
                'recent_bookings': recent_bookings,
                'events_with_bookings': [
                    {
                        'id': row.id,
                        'title': row.title,
                        'date': row.date,
                        'status': row.status,
                        'available_tickets': row.available_tickets,
                        'total_bookings': row.total_bookings,
                        'total_tickets_sold': row.total_tickets_sold,
                    }
                    for row in event_rows
                ],
            }

    @Logger.io
    async def get_user_summary(self, *, user_id: int) -> dict:
        own_booking = BookingModel.user_id == user_id

        async with self.session_factory() as session:
            total_bookings = await session.scalar(
                select(func.count()).select_from(BookingModel).where(own_booking)
            )
            upcoming_bookings = await session.scalar(
                select(func.count(BookingModel.id))
                .select_from(BookingModel)
                .join(EventModel, EventModel.id == BookingModel.event_id)
                .where(own_booking, _confirmed, EventModel.status == EventStatus.UPCOMING.value)
            )
            total_spent = await session.scalar(
                select(func.sum(BookingModel.total_amount)).where(own_booking, _confirmed)
            )
            unread = await session.scalar(
                select(func.count())
                .select_from(NotificationModel)
                .where(NotificationModel.user_id == user_id, NotificationModel.read.is_(False))
            )

            recent = await session.execute(
                select(BookingModel)
                .where(own_booking)
                .order_by(BookingModel.booking_date.desc(), BookingModel.id.desc())
                .limit(USER_RECENT_BOOKINGS_LIMIT)
            )

            return {
                'summary': {
                    'total_bookings': total_bookings or 0,
                    'upcoming_bookings': upcoming_bookings or 0,
                    'total_spent': _money(total_spent),
                    'unread_notifications': unread or 0,
                },
                'recent_bookings': [booking_model_to_dict(b) for b in recent.scalars().all()],
            }
