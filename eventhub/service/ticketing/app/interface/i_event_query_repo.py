from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


class IEventQueryRepo(ABC):
    """Event reads, joined with the organizer's display fields"""

    @abstractmethod
    async def get_by_id_with_organizer(self, *, event_id: int) -> Optional[dict]:
        pass

    @abstractmethod
    async def list_upcoming_public(
        self, *, category: Optional[str], search: Optional[str], page: int, limit: int
    ) -> Tuple[List[dict], int]:
        """Upcoming events ordered by date; returns (page of events, total matches)"""
        pass

    @abstractmethod
    async def list_managed(self, *, organizer_id: Optional[int]) -> List[dict]:
        """Events of one organizer (all events when None), newest first"""
        pass
