import datetime as dt
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import ConfigDict

from eventhub.service.ticketing.domain.entity.booking_entity import BookingStatus
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class BookingCreateRequest(CamelModel):
    model_config = ConfigDict(json_schema_extra={'example': {'eventId': 1, 'ticketsBooked': 2}})

    event_id: int
    tickets_booked: int


class BookingUserInfo(CamelModel):
    id: int
    name: str
    email: str


class BookingEventInfo(CamelModel):
    id: int
    title: str
    date: dt.date
    time: str
    location: str
    price: float
    status: EventStatus
    organizer_id: int


class BookingResponse(CamelModel):
    """Booking with the display fields of its user and event (null once either is gone)"""

    id: UUID
    user_id: int
    event_id: int
    tickets_booked: int
    total_amount: float
    status: BookingStatus
    booking_date: datetime
    updated_at: Optional[datetime] = None
    user: Optional[BookingUserInfo] = None
    event: Optional[BookingEventInfo] = None
