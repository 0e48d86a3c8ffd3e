from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from eventhub.service.ticketing.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    """
    Event writes; always bound to the unit of work's transaction

    The ticket counter is only touched through reserve_tickets / release_tickets /
    set_available_tickets, each a single conditional statement.
    """

    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def update(
        self, *, event_id: int, organizer_id: Optional[int], changes: Dict[str, Any]
    ) -> bool:
        """Apply column changes; False when the event does not exist or is not owned"""
        pass

    @abstractmethod
    async def set_available_tickets(
        self, *, event_id: int, organizer_id: Optional[int], available_tickets: int
    ) -> bool:
        """Set availability, shifting capacity by the same delta"""
        pass

    @abstractmethod
    async def delete(self, *, event_id: int, organizer_id: Optional[int]) -> bool:
        pass

    @abstractmethod
    async def reserve_tickets(self, *, event_id: int, quantity: int) -> Optional[EventEntity]:
        """
        Decrement available_tickets by quantity only if the event is upcoming and
        has enough tickets. Returns the updated event, or None when nothing matched.
        """
        pass

    @abstractmethod
    async def release_tickets(self, *, event_id: int, quantity: int) -> Optional[EventEntity]:
        """
        Increment available_tickets without going over capacity.

        None when the event no longer exists or cannot take the tickets back.
        """
        pass
