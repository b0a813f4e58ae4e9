from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_projection_dto import SeatMapView
from src.service.ticketing.app.event_access import get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction


class GetSeatMapUseCase:
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
    async def get_seat_map(self, *, event_id: str) -> SeatMapView:
        async def work(uow: AbstractUnitOfWork) -> SeatMapView:
            aggregate = await get_event_or_raise(uow.event_ticketing_query_repo, event_id=event_id)
            return SeatMapView.from_aggregate(aggregate)

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='get_seat_map',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
