from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.availability_oracle import AvailabilityCheckResult
from src.service.ticketing.domain.ticketing_error import TicketingErrorKind


# Failures reported as errors; every other reason is an ordinary "not available" answer
_RAISED_REASONS = frozenset({TicketingErrorKind.UNKNOWN_TICKET_TYPE, TicketingErrorKind.VALIDATION})


class CheckAvailabilityUseCase:
    """Read-only, advisory: the reservation re-validates inside its own transaction."""

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

    @Logger.io
    async def check(
        self, *, event_id: str, ticket_type: str, quantity: int, promo_code: Optional[str]
    ) -> AvailabilityCheckResult:
        async def work(uow: AbstractUnitOfWork) -> AvailabilityCheckResult:
            aggregate = await get_event_or_raise(uow.event_ticketing_query_repo, event_id=event_id)
            return aggregate.check_availability(
                ticket_type_name=ticket_type,
                quantity=quantity,
                promo_code=promo_code,
                now=self.clock(),
            )

        result = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='check_availability',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        if result.reason in _RAISED_REASONS:
            result.raise_if_blocked()
        return result
