from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

import attrs

from eventhub.platform.exception.exceptions import ValidationError
from eventhub.service.ticketing.domain.enum.event_category import EventCategory
from eventhub.service.ticketing.domain.enum.event_status import EventStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f'Event {attribute.name} cannot be empty')


def _validate_non_negative(instance: object, attribute: attrs.Attribute, value: Any) -> None:
    if value is not None and value < 0:
        raise ValidationError(f'Event {attribute.name} cannot be negative')


@attrs.define
class EventEntity:
    title: str = attrs.field(validator=_validate_non_empty_string)
    description: str = attrs.field(validator=_validate_non_empty_string)
    date: date
    time: str = attrs.field(validator=_validate_non_empty_string)
    location: str = attrs.field(validator=_validate_non_empty_string)
    organizer_id: int
    price: Decimal = attrs.field(converter=Decimal, validator=_validate_non_negative)
    available_tickets: int = attrs.field(validator=_validate_non_negative)
    total_tickets: int = attrs.field(validator=_validate_non_negative)
    category: EventCategory = EventCategory.OTHER
    status: EventStatus = EventStatus.UPCOMING
    image: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        title: str,
        description: str,
        date: date,
        time: str,
        location: str,
        organizer_id: int,
        price: Decimal,
        capacity: int,
        category: EventCategory = EventCategory.OTHER,
        status: EventStatus = EventStatus.UPCOMING,
        image: Optional[str] = None,
    ) -> 'EventEntity':
        # A new event starts with every ticket available
        return cls(
            title=title,
            description=description,
            date=date,
            time=time,
            location=location,
            organizer_id=organizer_id,
            price=price,
            available_tickets=capacity,
            total_tickets=capacity,
            category=category,
            status=status,
            image=image,
        )

    @property
    def is_bookable(self) -> bool:
        return self.status == EventStatus.UPCOMING

    @staticmethod
    def validate_changes(changes: Dict[str, Any]) -> None:
        """Reject partial updates that would break the event's field invariants"""
        for field in ('title', 'description', 'time', 'location'):
            if field in changes and (changes[field] is None or not str(changes[field]).strip()):
                raise ValidationError(f'Event {field} cannot be empty')
        for field in ('price', 'available_tickets'):
            if field in changes and (changes[field] is None or changes[field] < 0):
                raise ValidationError(f'Event {field} cannot be negative')
        for field in ('date', 'category', 'status'):
            if field in changes and changes[field] is None:
                raise ValidationError(f'Event {field} cannot be empty')
