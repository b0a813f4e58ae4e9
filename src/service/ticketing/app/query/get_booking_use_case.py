from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


class GetBookingUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, settings: Settings) -> None:
        self.uow_factory = uow_factory
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow.provider]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow_factory=uow_factory, settings=settings)

    @Logger.io
    async def get_booking(self, *, principal: UserEntity, booking_id: str) -> Booking:
        """The buyer sees their own booking; managers see bookings of events they manage."""

        async def work(uow: AbstractUnitOfWork) -> Booking:
            booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise TicketingError(
                    TicketingErrorKind.BOOKING_NOT_FOUND, f'Booking {booking_id} not found'
                )
            if booking.user_info.user_id == principal.id:
                return booking

            aggregate = await uow.event_ticketing_query_repo.get_by_id(event_id=booking.event_id)
            created_by = aggregate.event.created_by if aggregate else None
            if not principal.can_manage(created_by=created_by):
                raise ForbiddenError('You do not have access to this booking')
            return booking

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='get_booking',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
