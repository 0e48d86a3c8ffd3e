from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from eventhub.service.ticketing.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """Booking ledger writes; always bound to the unit of work's transaction"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def mark_cancelled_if_confirmed(self, *, booking_id: UUID) -> Optional[Booking]:
        """Conditional confirmed → cancelled transition; None when no confirmed row matched"""
        pass
