from typing import AsyncContextManager, Callable, Optional

from pydantic import SecretStr
from sqlalchemy import Select, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from eventhub.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: IPasswordHasher,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher

    async def _first(self, stmt: Select[tuple[UserModel]]) -> Optional[UserModel]:
        async with self.session_factory() as session:
            return (await session.execute(stmt)).scalar_one_or_none()

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        row = await self._first(select(UserModel).where(UserModel.id == user_id))
        return self._to_entity(row) if row else None

    @Logger.io
    async def exists_by_email(self, email: str) -> bool:
        async with self.session_factory() as session:
            return bool(await session.scalar(select(exists().where(UserModel.email == email))))

    @Logger.io
    async def find_by_credentials(self, email: str, plain_password: str) -> Optional[UserEntity]:
        row = await self._first(select(UserModel).where(UserModel.email == email))
        if row is None:
            return None
        if not self.password_hasher.matches(SecretStr(plain_password), row.hashed_password):
            return None
        return self._to_entity(row)

    @staticmethod
    def _to_entity(row: UserModel) -> UserEntity:
        return UserEntity(
            id=row.id,
            email=row.email,
            name=row.name,
            role=UserRole(row.role),
            created_at=row.created_at,
        )
