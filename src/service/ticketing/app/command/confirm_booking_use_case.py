"""
Confirm Booking Use Case (Booking Finalizer)

Consumes a reservation token plus a caller-supplied payment outcome:
1. Reject expired / unknown reservations; replay the stored booking when the
   reservation was already confirmed (idempotent on reservation id)
2. Move the reservation's inventory reserved -> sold, pin its seats as occupied
   holds, redeem its promo code, bump analytics
3. Save the event and write the booking in the same transaction
4. Notify the buyer (failures are logged, never fail the booking)

Payment is not captured here: a `failed` status is recorded as-is and the
caller decides whether to cancel.
"""

from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConcurrencyConflictError, DuplicateKeyError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.clock import Clock
from src.service.ticketing.app.dto.ticketing_result_dto import ConfirmBookingResult
from src.service.ticketing.app.event_access import get_event_or_raise
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory, run_event_transaction
from src.service.ticketing.app.interface.i_notification_sender import INotificationSender
from src.service.ticketing.domain.entity.booking_entity import Booking, generate_booking_id
from src.service.ticketing.domain.enum.booking_status import PaymentMethod, PaymentStatus
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


class ConfirmBookingUseCase:
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
        self.tracer = trace.get_tracer(__name__)

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

    async def _new_booking_id(self, uow: AbstractUnitOfWork, now: datetime) -> str:
        for _ in range(self.settings.BOOKING_ID_MAX_ATTEMPTS):
            booking_id = generate_booking_id(now)
            if await uow.booking_command_repo.get_by_id(booking_id=booking_id) is None:
                return booking_id
        raise TicketingError(
            TicketingErrorKind.INTERNAL_ERROR,
            f'Could not generate a unique booking id after '
            f'{self.settings.BOOKING_ID_MAX_ATTEMPTS} attempts',
        )

    @Logger.io
    async def confirm_booking(
        self,
        *,
        event_id: str,
        reservation_id: str,
        payment_method: PaymentMethod,
        payment_status: PaymentStatus,
        payment_id: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        booking_source: str = 'website',
    ) -> ConfirmBookingResult:
        """
        Args:
            expires_at: expiry echoed back by the caller; only used to report
                `reservation_expired` (instead of not-found) once the reaper removed the token
        """

        async def work(uow: AbstractUnitOfWork) -> ConfirmBookingResult:
            now = self.clock()
            reservation = await uow.reservation_repo.get_by_id(reservation_id=reservation_id)
            if reservation is None or reservation.event_id != event_id:
                if expires_at is not None and now >= expires_at:
                    raise TicketingError(
                        TicketingErrorKind.RESERVATION_EXPIRED, 'Reservation has expired'
                    )
                raise TicketingError(
                    TicketingErrorKind.RESERVATION_NOT_FOUND,
                    f'Reservation {reservation_id} not found',
                )

            if not reservation.is_active:
                existing = await uow.booking_command_repo.get_by_reservation_id(
                    reservation_id=reservation_id
                )
                if existing is None:
                    raise TicketingError(
                        TicketingErrorKind.INVENTORY_INCONSISTENT,
                        f'Reservation {reservation_id} is consumed but has no booking',
                    )
                return ConfirmBookingResult(booking=existing, replayed=True)

            if reservation.is_expired(now):
                raise TicketingError(TicketingErrorKind.RESERVATION_EXPIRED, 'Reservation has expired')

            aggregate = await get_event_or_raise(uow.event_ticketing_command_repo, event_id=event_id)
            booking_id = await self._new_booking_id(uow, now)

            promo_discount_type = aggregate.confirm_reservation(
                reservation=reservation, booking_id=booking_id, now=now
            )
            aggregate.check_invariants()
            await uow.event_ticketing_command_repo.update(event_aggregate=aggregate)

            booking = Booking.create_from_reservation(
                booking_id=booking_id,
                reservation=reservation,
                payment_method=payment_method,
                payment_status=payment_status,
                payment_id=payment_id,
                promo_discount_type=promo_discount_type,
                booking_source=booking_source,
                now=now,
            )
            try:
                booking = await uow.booking_command_repo.create(booking=booking)
            except DuplicateKeyError as e:
                # Lost a race on the booking id or on the reservation: re-run from scratch
                raise ConcurrencyConflictError(f'Booking insert collided on {e.key}') from e

            await uow.reservation_repo.update(
                reservation=reservation.mark_consumed(booking_id=booking.booking_id)
            )
            return ConfirmBookingResult(booking=booking, event_title=aggregate.event.title)

        with self.tracer.start_as_current_span(
            'use_case.confirm_booking',
            attributes={'event.id': event_id, 'reservation.id': reservation_id},
        ):
            result = await run_event_transaction(
                uow_factory=self.uow_factory,
                work=work,
                operation='confirm_booking',
                max_retries=self.settings.RESERVATION_MAX_RETRIES,
                timeout_seconds=self.settings.STORE_TIMEOUT_SECONDS,
            )

        if result.replayed:
            Logger.base.info(
                f'♻️ [CONFIRM] Reservation {reservation_id} already confirmed as '
                f'{result.booking.booking_id}'
            )
            return result

        metrics.record_booking_confirmed(
            payment_status=str(payment_status), total=result.booking.total
        )
        Logger.base.info(
            f'✅ [CONFIRM] Booking {result.booking.booking_id} created for {reservation_id}'
        )
        await self._notify(result.booking, event_title=result.event_title)
        return result

    async def _notify(self, booking: Booking, *, event_title: str) -> None:
        try:
            await self.notification_sender.send_booking_confirmation(
                booking=booking, event_title=event_title
            )
        except Exception as e:
            Logger.base.warning(
                f'⚠️ [CONFIRM] Notification for booking {booking.booking_id} failed: {e}'
            )
