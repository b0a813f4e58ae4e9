"""
Release Reservation Use Case

Same mutations as the reaper, triggered by the buyer before expiry:
reserved -> available, pending seats freed, promo code unbound (when this
reservation still holds it), reservation token deleted.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


async def release_in_transaction(uow: AbstractUnitOfWork, *, reservation: Reservation) -> bool:
    """Shared by the explicit release and the reaper. Returns whether inventory moved."""
    released = False
    aggregate = await uow.event_ticketing_command_repo.get_by_id(event_id=reservation.event_id)
    if aggregate is not None and aggregate.release_reservation(reservation=reservation):
        aggregate.check_invariants()
        await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)
        released = True
    await uow.reservation_repo.delete(reservation_id=reservation.reservation_id)
    return released


class ReleaseReservationUseCase:
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
    async def release(self, *, event_id: str, reservation_id: str) -> bool:
        async def work(uow: AbstractUnitOfWork) -> bool:
            reservation = await uow.reservation_repo.get_by_id(reservation_id=reservation_id)
            if reservation is None or reservation.event_id != event_id:
                raise TicketingError(
                    TicketingErrorKind.RESERVATION_NOT_FOUND,
                    f'Reservation {reservation_id} not found',
                )
            if not reservation.is_active:
                raise TicketingError(
                    TicketingErrorKind.INVALID_TRANSITION,
                    f'Reservation {reservation_id} is already confirmed',
                )
            return await release_in_transaction(uow, reservation=reservation)

        released = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='release_reservation',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        metrics.record_reservation_released(trigger='explicit', count=int(released))
        Logger.base.info(f'↩️ [RELEASE] Reservation {reservation_id} released')
        return released
