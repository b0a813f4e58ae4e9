from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


class UpdateBookingAttendanceUseCase:
    """confirmed -> checked_in | no_show (seats and inventory are not touched)"""

    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: Clock, settings: Settings):
        self.uow_factory = uow_factory
        self.clock = clock
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow.provider]),
        clock: Clock = Depends(Provide[Container.clock]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow_factory=uow_factory, clock=clock, settings=settings)

    async def _update(self, *, principal: UserEntity, booking_id: str, check_in: bool) -> Booking:
        async def work(uow: AbstractUnitOfWork) -> Booking:
            booking = await uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise TicketingError(
                    TicketingErrorKind.BOOKING_NOT_FOUND, f'Booking {booking_id} not found'
                )
            aggregate = await get_event_or_raise(
                uow.event_ticketing_query_repo, event_id=booking.event_id
            )
            ensure_can_manage(principal, aggregate)

            now = self.clock()
            if check_in:
                updated = booking.check_in(checked_in_by=principal.id, now=now)
            else:
                updated = booking.mark_no_show(now=now)
            return await uow.booking_command_repo.update(booking=updated)

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='check_in' if check_in else 'no_show',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )

    @Logger.io
    async def check_in(self, *, principal: UserEntity, booking_id: str) -> Booking:
        booking = await self._update(principal=principal, booking_id=booking_id, check_in=True)
        Logger.base.info(f'🚪 [CHECK_IN] Booking {booking_id} checked in by {principal.id}')
        return booking

    @Logger.io
    async def mark_no_show(self, *, principal: UserEntity, booking_id: str) -> Booking:
        booking = await self._update(principal=principal, booking_id=booking_id, check_in=False)
        Logger.base.info(f'🚫 [NO_SHOW] Booking {booking_id} marked as no-show')
        return booking
