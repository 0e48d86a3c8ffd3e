from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[dict]:
        """Get booking by ID with user and event display fields"""
        pass

    @abstractmethod
    async def list_with_details(
        self, *, user_id: Optional[int] = None, organizer_id: Optional[int] = None
    ) -> List[dict]:
        """Newest first. No filter lists every booking."""
        pass
