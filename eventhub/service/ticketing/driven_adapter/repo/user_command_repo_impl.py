from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.platform.exception.exceptions import ConflictError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Unique index on email; the pre-check in the use case can lose a race
                raise ConflictError(f'User with email {user_entity.email} already exists') from e

            return self._model_to_entity(user_model)

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            name=user_model.name,
            role=UserRole(user_model.role),
            created_at=user_model.created_at,
        )
