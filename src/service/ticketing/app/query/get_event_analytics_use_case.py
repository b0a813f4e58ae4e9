from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_projection_dto import EventAnalyticsReport
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.user_entity import UserEntity


class GetEventAnalyticsUseCase:
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
    async def get_analytics(self, *, principal: UserEntity, event_id: str) -> EventAnalyticsReport:
        async def work(uow: AbstractUnitOfWork) -> EventAnalyticsReport:
            aggregate = await get_event_or_raise(uow.event_ticketing_query_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)
            bookings = await uow.booking_query_repo.list_by_event(event_id=event_id)
            return EventAnalyticsReport.from_aggregate(aggregate, bookings=bookings)

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='get_event_analytics',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
