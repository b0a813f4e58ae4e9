from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.domain.entity.admin_hold_entity import AdminHold
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.value_object.user_info import UserInfo


class AddAdminHoldUseCase:
    """
    Pin a seat administratively (seat -> held_admin)

    Ticket type counters are left untouched; the hold only removes the seat
    from the allocator's candidate pool.
    """

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
    async def add_hold(
        self,
        *,
        principal: UserEntity,
        event_id: str,
        seat_number: str,
        ticket_type: str,
        reserved_for: UserInfo,
        notes: str = '',
        promo_code_used: str | None = None,
    ) -> AdminHold:
        async def work(uow: AbstractUnitOfWork) -> AdminHold:
            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            ensure_can_manage(principal, aggregate)
            hold = aggregate.add_admin_hold(
                seat_number=seat_number,
                ticket_type_name=ticket_type,
                reserved_for=reserved_for,
                reserved_by=principal.id,
                now=self.clock(),
                notes=notes,
                promo_code_used=promo_code_used,
            )
            aggregate.check_invariants()
            await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)
            return hold

        hold = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='add_admin_hold',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        Logger.base.info(f'📌 [ADMIN_HOLD] Seat {hold.seat_number} held on event {event_id}')
        return hold
