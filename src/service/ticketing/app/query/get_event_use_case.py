from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.event_access import get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import EventTicketingAggregate


class GetEventUseCase:
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
    async def get_by_id(self, *, event_id: str, count_view: bool = True) -> EventTicketingAggregate:
        """Load an event; a public view also bumps its view counter."""
        Logger.base.info(f'🎫 [GET_EVENT] Loading event {event_id}')

        async def work(uow: AbstractUnitOfWork) -> EventTicketingAggregate:
            aggregate = await get_event_or_raise(uow.event_ticketing_query_repo, event_id=event_id)
            if count_view:
                await uow.event_ticketing_query_repo.increment_views(event_id=event_id)
                aggregate.analytics.total_views += 1
            return aggregate

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='get_event',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
