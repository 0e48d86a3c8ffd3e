import datetime as dt
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field

from eventhub.service.ticketing.domain.enum.event_category import EventCategory
from eventhub.service.ticketing.domain.enum.event_status import EventStatus
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class EventCreateRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Summer Jazz Night',
                'description': 'An evening of live jazz by the river',
                'date': '2027-07-12',
                'time': '19:30',
                'location': 'Riverside Park',
                'category': 'concert',
                'price': 25.0,
                'availableTickets': 200,
            }
        }
    )

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., min_length=1, max_length=20)
    location: str = Field(..., min_length=1, max_length=255)
    category: EventCategory = EventCategory.OTHER
    image: Optional[str] = Field(None, max_length=1024)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    available_tickets: int = Field(..., ge=0)
    status: EventStatus = EventStatus.UPCOMING


class EventUpdateRequest(CamelModel):
    """Every field optional; only the fields sent are changed"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, min_length=1, max_length=20)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[EventCategory] = None
    image: Optional[str] = Field(None, max_length=1024)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    available_tickets: Optional[int] = None
    status: Optional[EventStatus] = None


class OrganizerInfo(CamelModel):
    id: int
    name: str
    email: str


class EventResponse(CamelModel):
    id: int
    organizer_id: int
    title: str
    description: str
    date: dt.date
    time: str
    location: str
    category: EventCategory
    image: Optional[str] = None
    price: float
    available_tickets: int
    total_tickets: int
    status: EventStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    organizer: Optional[OrganizerInfo] = None


class PublicEventListResponse(CamelModel):
    events: List[EventResponse]
    total_pages: int
    current_page: int
    total: int
