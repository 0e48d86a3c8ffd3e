from abc import ABC, abstractmethod
from typing import Optional

from eventhub.service.ticketing.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]: ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool: ...

    @abstractmethod
    async def find_by_credentials(self, email: str, plain_password: str) -> Optional[UserEntity]:
        """The account when email and password both match, else None (never says which failed)"""
