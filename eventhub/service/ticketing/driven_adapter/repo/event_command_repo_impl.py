"""
Event Command Repository Implementation

Every ticket-counter change is one conditional UPDATE statement, so the
availability check and the write happen atomically inside the store and two
concurrent bookings can never both pass the check against the same tickets.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from eventhub.service.ticketing.domain.entity.event_entity import EventEntity
from eventhub.service.ticketing.domain.enum.event_category import EventCategory
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel


_event_table = EventModel.__table__

# Columns a partial update may touch directly; the counters have dedicated statements
UPDATABLE_COLUMNS = frozenset(
    {'title', 'description', 'date', 'time', 'location', 'category', 'image', 'price', 'status'}
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _row_to_entity(row: Mapping[str, Any]) -> EventEntity:
        return EventEntity(
            id=row['id'],
            organizer_id=row['organizer_id'],
            title=row['title'],
            description=row['description'],
            date=row['date'],
            time=row['time'],
            location=row['location'],
            category=EventCategory(row['category']),
            image=row['image'],
            price=row['price'],
            available_tickets=row['available_tickets'],
            total_tickets=row['total_tickets'],
            status=EventStatus(row['status']),
            created_at=row['created_at'],
            updated_at=row['updated_at'],
        )

    @staticmethod
    def _model_to_entity(model: EventModel) -> EventEntity:
        return EventCommandRepoImpl._row_to_entity(
            {column.key: getattr(model, column.key) for column in _event_table.columns}
        )

    def _owned(self, stmt, *, event_id: int, organizer_id: Optional[int]):
        stmt = stmt.where(_event_table.c.id == event_id)
        if organizer_id is not None:
            stmt = stmt.where(_event_table.c.organizer_id == organizer_id)
        return stmt

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        model = EventModel(
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            date=event.date,
            time=event.time,
            location=event.location,
            category=event.category.value,
            image=event.image,
            price=event.price,
            available_tickets=event.available_tickets,
            total_tickets=event.total_tickets,
            status=event.status.value,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        result = await self.session.execute(
            select(_event_table).where(_event_table.c.id == event_id)
        )
        row = result.mappings().one_or_none()
        return self._row_to_entity(row) if row else None

    @Logger.io
    async def update(
        self, *, event_id: int, organizer_id: Optional[int], changes: Dict[str, Any]
    ) -> bool:
        values = {
            key: (value.value if isinstance(value, (EventCategory, EventStatus)) else value)
            for key, value in changes.items()
            if key in UPDATABLE_COLUMNS
        }
        if not values:
            # Nothing to write; still report whether the caller may see the event
            exists = await self.session.execute(
                self._owned(
                    select(_event_table.c.id), event_id=event_id, organizer_id=organizer_id
                )
            )
            return exists.scalar_one_or_none() is not None

        result = await self.session.execute(
            self._owned(
                update(_event_table), event_id=event_id, organizer_id=organizer_id
            ).values(**values)
        )
        return result.rowcount > 0

    @Logger.io
    async def set_available_tickets(
        self, *, event_id: int, organizer_id: Optional[int], available_tickets: int
    ) -> bool:
        # SET expressions read the pre-update row, so capacity moves by exactly the
        # same delta as availability and the sold count is untouched
        stmt = self._owned(
            update(_event_table), event_id=event_id, organizer_id=organizer_id
        ).values(
            total_tickets=_event_table.c.total_tickets
            + (available_tickets - _event_table.c.available_tickets),
            available_tickets=available_tickets,
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    @Logger.io
    async def delete(self, *, event_id: int, organizer_id: Optional[int]) -> bool:
        result = await self.session.execute(
            self._owned(delete(_event_table), event_id=event_id, organizer_id=organizer_id)
        )
        return result.rowcount > 0

    @Logger.io
    async def reserve_tickets(self, *, event_id: int, quantity: int) -> Optional[EventEntity]:
        stmt = (
            update(_event_table)
            .where(
                _event_table.c.id == event_id,
                _event_table.c.status == EventStatus.UPCOMING.value,
                _event_table.c.available_tickets >= quantity,
            )
            .values(available_tickets=_event_table.c.available_tickets - quantity)
            .returning(*_event_table.columns)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._row_to_entity(row) if row else None

    @Logger.io
    async def release_tickets(self, *, event_id: int, quantity: int) -> Optional[EventEntity]:
        stmt = (
            update(_event_table)
            .where(
                _event_table.c.id == event_id,
                _event_table.c.available_tickets + quantity <= _event_table.c.total_tickets,
            )
            .values(available_tickets=_event_table.c.available_tickets + quantity)
            .returning(*_event_table.columns)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._row_to_entity(row) if row else None
