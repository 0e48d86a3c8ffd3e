"""
Unit of Work Pattern - one database transaction per atomic unit

Architecture:
- UoW opens the session and owns its lifecycle
- UoW is responsible for commit/rollback (rollback on exit unless committed)
- Command repositories share the UoW session, so every statement issued
  inside `async with uow:` belongs to the same transaction
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from eventhub.service.ticketing.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from eventhub.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo


# SQLSTATE codes PostgreSQL uses for conflicts that succeed when retried
_RETRYABLE_SQLSTATES = frozenset({'40001', '40P01'})  # serialization_failure, deadlock_detected


def is_transient_db_error(exc: BaseException) -> bool:
    """True for store conflicts/outages that a fresh transaction may not hit again"""
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError):
        if exc.connection_invalidated:
            return True
        orig = exc.orig
        sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
        return sqlstate in _RETRYABLE_SQLSTATES
    return False


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the booking coordinator

    Usage:
        async with uow:
            event = await uow.event_command_repo.reserve_tickets(...)
            booking = await uow.booking_command_repo.create(...)
            await uow.commit()
    """

    booking_command_repo: IBookingCommandRepo
    event_command_repo: IEventCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Each `async with` block opens a fresh session, so one instance can be
    re-entered for every retry attempt of a use case. Not shareable between
    concurrent tasks: the DI container hands out one instance per request.
    """

    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self._session_cm: Optional[AbstractAsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from eventhub.service.ticketing.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from eventhub.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share the transaction's session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.event_command_repo = EventCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            session_cm, self._session_cm, self.session = self._session_cm, None, None
            if session_cm is not None:
                await session_cm.__aexit__(*args)

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
