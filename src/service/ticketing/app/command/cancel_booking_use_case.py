"""
Cancel Booking Use Case

The only undo for a confirmed booking:
- occupied holds of the booking are removed (seats go back to free)
- sold inventory is refunded to available
- analytics bookings / revenue are decremented
- the promo code stays redeemed (a used free code is never recycled)
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.clock import Clock
from src.service.ticketing.app.event_access import ensure_can_manage, get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.app.interface.i_notification_sender import INotificationSender
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


class CancelBookingUseCase:
    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        clock: Clock,
        settings: Settings,
        notification_sender: INotificationSender,
    ):
        self.uow_factory = uow_factory
        self.clock = clock
        self.settings = settings
        self.notification_sender = notification_sender

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow.provider]),
        clock: Clock = Depends(Provide[Container.clock]),
        settings: Settings = Depends(Provide[Container.config_service]),
        notification_sender: INotificationSender = Depends(
            Provide[Container.notification_sender]
        ),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            clock=clock,
            settings=settings,
            notification_sender=notification_sender,
        )

    @Logger.io
    async def cancel_booking(
        self, *, principal: UserEntity, booking_id: str, reason: Optional[str] = None
    ) -> Booking:
        event_title = ''

        async def work(uow: AbstractUnitOfWork) -> Booking:
            nonlocal event_title
            booking = await uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise TicketingError(
                    TicketingErrorKind.BOOKING_NOT_FOUND, f'Booking {booking_id} not found'
                )
            aggregate = await get_event_or_raise(
                uow.event_ticketing_command_repo, event_id=booking.event_id
            )
            ensure_can_manage(principal, aggregate)

            cancelled = booking.cancel(reason=reason, now=self.clock())
            aggregate.cancel_booking(booking=booking)
            aggregate.check_invariants()
            await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)
            event_title = aggregate.event.title
            return await uow.booking_command_repo.update(booking=cancelled)

        cancelled = await run_event_transaction(
            uow_factory=self.uow_factory,
            work=work,
            operation='cancel_booking',
            max_retries=self.settings.RESERVATION_MAX_RETRIES,
            timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
        )
        metrics.record_booking_cancelled()
        Logger.base.info(f'❌ [CANCEL] Booking {booking_id} cancelled, seats returned')

        try:
            await self.notification_sender.send_booking_cancellation(
                booking=cancelled, event_title=event_title
            )
        except Exception as e:
            Logger.base.warning(f'⚠️ [CANCEL] Notification for booking {booking_id} failed: {e}')
        return cancelled
