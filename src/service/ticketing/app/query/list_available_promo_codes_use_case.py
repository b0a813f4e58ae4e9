from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.dto.event_projection_dto import PromoCodeInventory
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.user_entity import UserEntity


class ListAvailablePromoCodesUseCase:
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

    @Logger.io(truncate_content=True)
    async def list_promo_codes(self, *, principal: UserEntity, event_id: str) -> PromoCodeInventory:
        async def work(uow: AbstractUnitOfWork) -> PromoCodeInventory:
            aggregate = await get_event_or_raise(uow.event_ticketing_query_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)
            return PromoCodeInventory.from_aggregate(aggregate, now=self.clock())

        return await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='list_promo_codes',
            max_retries=0,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
