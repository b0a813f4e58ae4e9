from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


class DeleteEventUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, settings: Settings):
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
    async def delete_event(self, *, principal: UserEntity, event_id: str) -> None:
        """Events that still have live bookings cannot be deleted."""

        async def work(uow: AbstractUnitOfWork) -> None:
            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)

            bookings = await uow.booking_query_repo.list_by_event(event_id=event_id)
            live = [
                booking
                for booking in bookings
                if booking.booking_status in (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)
            ]
            if live:
                raise TicketingError(
                    TicketingErrorKind.VALIDATION,
                    f'Event has {len(live)} confirmed bookings and cannot be deleted',
                )
            await uow.event_ticketing_command_repo.delete(event_id=event_id)

        await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='delete_event',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        Logger.base.info(f'🗑️ [DELETE_EVENT] Event {event_id} deleted by {principal.id}')
