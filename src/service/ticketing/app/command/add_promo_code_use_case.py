from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.promo_code_entity import PromoCode
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.discount_type import DiscountType


class AddPromoCodeUseCase:
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
    async def add_promo_code(
        self,
        *,
        principal: UserEntity,
        event_id: str,
        code: str,
        discount_type: DiscountType = DiscountType.FREE,
        discount_value: float = 0.0,
        max_uses: int = 1,
        valid_from: Optional[datetime] = None,
        valid_until: Optional[datetime] = None,
        applicable_ticket_types: Optional[List[str]] = None,
        description: str = '',
        min_order_value: Optional[float] = None,
    ) -> PromoCode:
        async def work(uow: AbstractUnitOfWork) -> PromoCode:
            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)
            promo = aggregate.add_promo_code(
                code=code,
                now=self.clock(),
                discount_type=discount_type,
                discount_value=discount_value,
                max_uses=max_uses,
                valid_from=valid_from,
                valid_until=valid_until,
                applicable_ticket_types=applicable_ticket_types,
                description=description,
                min_order_value=min_order_value,
            )
            await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)
            return promo

        promo = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='add_promo_code',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        Logger.base.info(f'🏷️ [PROMO] Code {promo.code} added to event {event_id}')
        return promo
