"""
Reserve Tickets Use Case (Reservation Manager)

Under one event transaction:
1. Re-run the availability checks against the freshly read event
2. Allocate seats, bind the promo code (if any), move inventory available -> reserved
3. Save the event (version-checked) and store the reservation token

Version conflicts re-run the whole cycle (bounded); exhaustion surfaces `contention`.
"""

from datetime import timedelta
import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.reservation_entity import (
    Reservation,
    generate_reservation_id,
)
from src.service.ticketing.domain.ticketing_error import TicketingError
from src.service.ticketing.domain.value_object.user_info import UserInfo


class ReserveTicketsUseCase:
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

    @Logger.io
    async def reserve(
        self,
        *,
        event_id: str,
        ticket_type: str,
        quantity: int,
        promo_code: Optional[str],
        user_info: UserInfo,
    ) -> Reservation:
        ttl = timedelta(minutes=self.settings.RESERVATION_TTL_MINUTES)
        started = time.perf_counter()

        async def work(uow: AbstractUnitOfWork) -> Reservation:
            now = self.clock()
            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            reservation = aggregate.reserve(
                reservation_id=generate_reservation_id(now),
                ticket_type_name=ticket_type,
                quantity=quantity,
                promo_code=promo_code,
                user_info=user_info,
                now=now,
                ttl=ttl,
            )
            aggregate.check_invariants()
            await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)
            return await uow.reservation_repo.create(reservation=reservation)

        with self.tracer.start_as_current_span(
            'use_case.reserve_tickets',
            attributes={
                'event.id': event_id,
                'ticket.type': ticket_type,
                'ticket.quantity': quantity,
            },
        ):
            try:
                reservation = await run_event_transaction(
                    uow_factory=self.uow_factory,
                    work=work,
                    operation='reserve',
                    max_retries=self.settings.RESERVATION_MAX_RETRIES,
                    timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
                )
            except TicketingError as e:
                metrics.record_reservation(
                    ticket_type=ticket_type,
                    result=str(e.kind),
                    duration=time.perf_counter() - started,
                )
                raise

        metrics.record_reservation(
            ticket_type=ticket_type, result='success', duration=time.perf_counter() - started
        )
        Logger.base.info(
            f'🎟️ [RESERVE] {reservation.reservation_id} holds {", ".join(reservation.seats)} '
            f'until {reservation.expires_at.isoformat()}'
        )
        return reservation
