from abc import ABC, abstractmethod


class IDashboardQueryRepo(ABC):
    """Aggregate reads behind the three dashboards"""

    @abstractmethod
    async def get_admin_summary(self) -> dict:
        pass

    @abstractmethod
    async def get_organizer_summary(self, *, organizer_id: int) -> dict:
        pass

    @abstractmethod
    async def get_user_summary(self, *, user_id: int) -> dict:
        pass
