"""
Create Event Use Case

- Builds the EventTicketingAggregate (event, ticket types, promo code pool) in the domain
- Persists it in one unit of work
"""

from datetime import timedelta
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
import attrs
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, new_entity_id
from src.service.ticketing.app.dto.ticketing_result_dto import CreateEventResult
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    DEFAULT_CODE_TICKET_COUNT,
    DEFAULT_PAID_TICKET_COUNT,
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.ticket_type_entity import TicketType
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.value_object.seating_config import SeatingConfig


class CreateEventAndTicketsUseCase:
    """
    Create Event and Ticket Types Use Case

    Without explicit ticket types the event gets the default pair: a paid
    front-zone ticket and a promo-gated free back-zone ticket, plus one
    single-use free code per code ticket.
    """

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
    async def create_event_and_tickets(
        self,
        *,
        principal: UserEntity,
        event: Event,
        seating_config: SeatingConfig,
        ticket_types: Optional[List[TicketType]] = None,
        paid_ticket_count: int = DEFAULT_PAID_TICKET_COUNT,
        paid_ticket_price: float = 0.0,
        code_ticket_count: int = DEFAULT_CODE_TICKET_COUNT,
    ) -> CreateEventResult:
        with self.tracer.start_as_current_span(
            'use_case.create_event', attributes={'user.id': principal.id}
        ):
            now = self.clock()
            event_aggregate = EventTicketingAggregate.create_event_with_tickets(
                event=attrs.evolve(event, id=new_entity_id(), created_by=principal.id),
                seating_config=seating_config,
                now=now,
                ticket_types=ticket_types,
                paid_ticket_count=paid_ticket_count,
                paid_ticket_price=paid_ticket_price,
                code_ticket_count=code_ticket_count,
                promo_code_validity=timedelta(days=self.settings.PROMO_CODE_VALIDITY_DAYS),
                promo_code_max_attempts=self.settings.PROMO_CODE_MAX_ATTEMPTS,
            )

            async def work(uow: AbstractUnitOfWork) -> EventTicketingAggregate:
                return await uow.event_ticketing_command_repo.create(
                    event_aggregate=event_aggregate
                )

            saved = await run_event_transaction(
                uow_factory=self.uow_factory,
                work=work,
                operation='create_event',
                max_retries=0,
                timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
            )

            Logger.base.info(f'✅ [CREATE_EVENT] Event {saved.event_id} created')
            return CreateEventResult(
                event_aggregate=saved,
                generated_promo_codes=[promo.code for promo in saved.promo_codes],
            )
