from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity


class UpdateEventUseCase:
    """Edit descriptive event fields; inventory (ticket types, seating, codes) is not editable here."""

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
    async def update_event(
        self, *, principal: UserEntity, event_id: str, changes: Dict[str, Any]
    ) -> EventTicketingAggregate:
        async def work(uow: AbstractUnitOfWork) -> EventTicketingAggregate:
            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)
            aggregate.update_details(changes=changes, by=principal.id, now=self.clock())
            return await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='update_event',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
