"""
Unit of Work Pattern - one database transaction shared by the ticketing repositories

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories receive the UoW's session, so every write inside one
  `async with uow:` block lands in the same transaction
- Use cases open a fresh UoW per attempt (see run_event_transaction)
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable

import anyio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.platform.database.orm_db_setting import get_session_maker


if TYPE_CHECKING:
    from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
        IEventTicketingCommandRepo,
    )
    from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
        IEventTicketingQueryRepo,
    )
    from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the ticketing service

    Usage:
        async with uow:
            event = await uow.event_ticketing_command_repo.get_by_id(event_id=...)
            ...
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    event_ticketing_command_repo: IEventTicketingCommandRepo
    event_ticketing_query_repo: IEventTicketingQueryRepo
    reservation_repo: IReservationRepo
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        # Shielded so a fail_after deadline cannot interrupt the rollback
        with anyio.CancelScope(shield=True):
            await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self,
        session_maker_factory: Callable[
            [], async_sessionmaker[AsyncSession]
        ] = get_session_maker,
    ) -> None:
        self._session_maker_factory = session_maker_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.ticketing.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_ticketing_command_repo_impl import (
            EventTicketingCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_ticketing_query_repo_impl import (
            EventTicketingQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.reservation_repo_impl import (
            ReservationRepoImpl,
        )

        self.session = self._session_maker_factory()()

        # Create repositories with shared session
        self.event_ticketing_command_repo = EventTicketingCommandRepoImpl(session=self.session)
        self.event_ticketing_query_repo = EventTicketingQueryRepoImpl(session=self.session)
        self.reservation_repo = ReservationRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        await super().__aexit__(*args)
        if self.session is not None:
            with anyio.CancelScope(shield=True):
                await self.session.close()
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside of `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
