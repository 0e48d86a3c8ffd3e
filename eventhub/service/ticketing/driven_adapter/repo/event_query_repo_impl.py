from typing import AsyncContextManager, Callable, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel


ALL_CATEGORIES = 'all'


def event_model_to_dict(db_event: EventModel) -> dict:
    organizer = db_event.organizer
    return {
        'id': db_event.id,
        'organizer_id': db_event.organizer_id,
        'title': db_event.title,
        'description': db_event.description,
        'date': db_event.date,
        'time': db_event.time,
        'location': db_event.location,
        'category': db_event.category,
        'image': db_event.image,
        'price': db_event.price,
        'available_tickets': db_event.available_tickets,
        'total_tickets': db_event.total_tickets,
        'status': db_event.status,
        'created_at': db_event.created_at,
        'updated_at': db_event.updated_at,
        'organizer': {'id': organizer.id, 'name': organizer.name, 'email': organizer.email}
        if organizer
        else None,
    }


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id_with_organizer(self, *, event_id: int) -> Optional[dict]:
        async with self.session_factory() as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            db_event = result.scalar_one_or_none()
            return event_model_to_dict(db_event) if db_event else None

    @Logger.io
    async def list_upcoming_public(
        self, *, category: Optional[str], search: Optional[str], page: int, limit: int
    ) -> Tuple[List[dict], int]:
        filters = [EventModel.status == EventStatus.UPCOMING.value]
        if category and category != ALL_CATEGORIES:
            filters.append(EventModel.category == category)
        if search and search.strip():
            term = search.strip()
            filters.append(
                or_(
                    EventModel.title.icontains(term, autoescape=True),
                    EventModel.description.icontains(term, autoescape=True),
                    EventModel.location.icontains(term, autoescape=True),
                )
            )

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(EventModel).where(*filters)
            )
            result = await session.execute(
                select(EventModel)
                .where(*filters)
                .order_by(EventModel.date.asc(), EventModel.time.asc(), EventModel.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            events = [event_model_to_dict(db_event) for db_event in result.scalars().all()]

        return events, total or 0

    @Logger.io
    async def list_managed(self, *, organizer_id: Optional[int]) -> List[dict]:
        stmt = select(EventModel).order_by(EventModel.created_at.desc(), EventModel.id.desc())
        if organizer_id is not None:
            stmt = stmt.where(EventModel.organizer_id == organizer_id)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [event_model_to_dict(db_event) for db_event in result.scalars().all()]
