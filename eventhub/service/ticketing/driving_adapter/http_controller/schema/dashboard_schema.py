import datetime as dt
from typing import List

from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)
from eventhub.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)


# === Admin ===


class AdminSummary(CamelModel):
    total_users: int
    total_events: int
    total_bookings: int
    total_revenue: float


class DailyBookings(CamelModel):
    date: str
    count: int
    revenue: float


class PopularEvent(CamelModel):
    event_id: int
    title: str
    total_bookings: int
    total_tickets: int
    total_revenue: float


class RoleCount(CamelModel):
    role: str
    count: int


class CategoryCount(CamelModel):
    category: str
    count: int


class AdminCharts(CamelModel):
    recent_bookings: List[DailyBookings]
    popular_events: List[PopularEvent]
    user_stats: List[RoleCount]
    event_stats: List[CategoryCount]


class AdminDashboardResponse(CamelModel):
    summary: AdminSummary
    charts: AdminCharts


# === Organizer ===


class OrganizerSummary(CamelModel):
    total_events: int
    upcoming_events: int
    total_bookings: int
    total_revenue: float


class EventWithBookings(CamelModel):
    id: int
    title: str
    date: dt.date
    status: str
    available_tickets: int
    total_bookings: int
    total_tickets_sold: int


class OrganizerDashboardResponse(CamelModel):
    summary: OrganizerSummary
    recent_bookings: List[BookingResponse]
    events_with_bookings: List[EventWithBookings]


# === User ===


class UserSummary(CamelModel):
    total_bookings: int
    upcoming_bookings: int
    total_spent: float
    unread_notifications: int


class UserDashboardResponse(CamelModel):
    summary: UserSummary
    recent_bookings: List[BookingResponse]
