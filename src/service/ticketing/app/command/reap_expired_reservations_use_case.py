"""
Reap Expired Reservations Use Case (Reservation Reaper)

One sweep: find active reservations with expires_at < now and release each in
its own event transaction. Idempotent: a reservation that is already gone,
already consumed, or no longer pending on its event is left as-is (the token
is still removed when unconsumed).
"""

import time
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.clock import Clock
from src.service.ticketing.app.command.release_reservation_use_case import release_in_transaction
from src.service.ticketing.app.dto.ticketing_result_dto import ReapSweepResult
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.ticketing_error import TicketingError


class ReapExpiredReservationsUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: Clock, settings: Settings):
        self.uow_factory = uow_factory
        self.clock = clock
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow.provider]),
        clock: Clock = Depends(Provide[Container.clock]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow_factory=uow_factory, clock=clock, settings=settings)

    async def _reap_one(self, candidate: Reservation) -> bool:
        async def work(uow: AbstractUnitOfWork) -> bool:
            reservation = await uow.reservation_repo.get_by_id(
                reservation_id=candidate.reservation_id
            )
            if reservation is None or not reservation.is_active:
                return False
            return await release_in_transaction(uow, reservation=reservation)

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='reap_reservation',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )

    @Logger.io(truncate_content=True)
    async def reap(self) -> ReapSweepResult:
        started = time.perf_counter()
        now = self.clock()

        async def find_expired(uow: AbstractUnitOfWork) -> List[Reservation]:
            return await uow.reservation_repo.list_expired(
                now=now, limit=self.settings.REAPER_BATCH_SIZE
            )

        with self.tracer.start_as_current_span('use_case.reap_expired_reservations'):
            expired = await run_event_transaction(
                uow_factory=self.uow_factory,
                work=find_expired,
                operation='list_expired_reservations',
                max_retries=0,
                timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
            )

            released = failed = 0
            for reservation in expired:
                try:
                    if await self._reap_one(reservation):
                        released += 1
                except TicketingError as e:
                    # Contention / timeout on one event must not stall the rest of the sweep
                    failed += 1
                    Logger.base.warning(
                        f'⚠️ [REAPER] Could not release {reservation.reservation_id}: {e}'
                    )

        metrics.record_reservation_released(trigger='reaper', count=released)
        metrics.record_reaper_sweep(duration=time.perf_counter() - started)
        if expired:
            Logger.base.info(
                f'🧹 [REAPER] Examined {len(expired)} expired reservations, '
                f'released {released}, failed {failed}'
            )
        return ReapSweepResult(examined=len(expired), released=released, failed=failed)
