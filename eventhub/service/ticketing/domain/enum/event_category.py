from enum import StrEnum


class EventCategory(StrEnum):
    CONCERT = 'concert'
    CONFERENCE = 'conference'
    WORKSHOP = 'workshop'
    SPORTS = 'sports'
    FESTIVAL = 'festival'
    OTHER = 'other'
