from typing import List, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_list_filter import EventListFilter
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import EventTicketingAggregate


class ListEventsUseCase:
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

    @Logger.io(truncate_content=True)
    async def list_events(
        self, *, event_filter: EventListFilter
    ) -> Tuple[List[EventTicketingAggregate], int]:
        async def work(uow: AbstractUnitOfWork) -> Tuple[List[EventTicketingAggregate], int]:
            return await uow.event_ticketing_query_repo.list_events(event_filter=event_filter)

        events, total = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='list_events',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        Logger.base.info(f'📋 [LIST_EVENTS] {len(events)} of {total} events on page {event_filter.page}')
        return events, total
