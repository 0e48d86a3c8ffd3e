from enum import StrEnum


class EventStatus(StrEnum):
    """Only UPCOMING events accept bookings"""

    UPCOMING = 'upcoming'
    PAST = 'past'
    CANCELLED = 'cancelled'
