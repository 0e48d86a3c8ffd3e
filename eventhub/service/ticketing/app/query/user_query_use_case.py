"""
User Management Use Cases (Use Case Layer)
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.exception.exceptions import ConflictError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from eventhub.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from eventhub.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity, UserRole


class UserUseCase:
    """User management use case class with proper dependency injection (CQRS)"""

    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> UserEntity:
        UserEntity.validate_signup_role(role)
        return await self._register(email=email, password=password, name=name, role=role)

    @Logger.io
    async def get_user_by_id(self, user_id: int) -> UserEntity | None:
        return await self.user_query_repo.get_by_id(user_id)

    @Logger.io
    async def ensure_admin(self, *, email: str, password: str, name: str) -> UserEntity | None:
        """Create the bootstrap admin account unless the email is already registered"""
        if await self.user_query_repo.exists_by_email(email):
            Logger.base.info(f'👤 [BOOTSTRAP] Admin account {email} already present')
            return None

        try:
            admin = await self._register(
                email=email, password=password, name=name, role=UserRole.ADMIN
            )
        except ConflictError:
            # Another worker created it between the check and the insert
            return None

        Logger.base.info(f'👤 [BOOTSTRAP] Admin account {email} created')
        return admin

    async def _register(
        self, *, email: str, password: str, name: str, role: UserRole
    ) -> UserEntity:
        if await self.user_query_repo.exists_by_email(email):
            raise ConflictError(f'User with email {email} already exists')

        user_entity = UserEntity(email=email, name=name, role=role)
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity)
