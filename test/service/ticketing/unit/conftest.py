"""
Unit test configuration for the ticketing service.

Unit tests are marked `unit`, so the root conftest leaves the DI container
alone; use cases are built by hand over the in-memory store and frozen clock.
"""

import pytest

from src.platform.config.core_setting import Settings
from src.service.ticketing.app.command.confirm_booking_use_case import ConfirmBookingUseCase
from src.service.ticketing.app.command.reap_expired_reservations_use_case import (
    ReapExpiredReservationsUseCase,
)
from src.service.ticketing.app.command.release_reservation_use_case import (
    ReleaseReservationUseCase,
)
from src.service.ticketing.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory
from src.service.ticketing.driven_adapter.notification.logging_notification_sender import (
    LoggingNotificationSender,
)
from test.shared.utils import FrozenClock


@pytest.fixture
def notification_sender() -> LoggingNotificationSender:
    return LoggingNotificationSender()


@pytest.fixture
def reserve_use_case(
    uow_factory: UnitOfWorkFactory, clock: FrozenClock, ticketing_settings: Settings
) -> ReserveTicketsUseCase:
    return ReserveTicketsUseCase(uow_factory=uow_factory, clock=clock, settings=ticketing_settings)


@pytest.fixture
def confirm_use_case(
    uow_factory: UnitOfWorkFactory,
    clock: FrozenClock,
    ticketing_settings: Settings,
    notification_sender: LoggingNotificationSender,
) -> ConfirmBookingUseCase:
    return ConfirmBookingUseCase(
        uow_factory=uow_factory,
        clock=clock,
        settings=ticketing_settings,
        notification_sender=notification_sender,
    )


@pytest.fixture
def release_use_case(
    uow_factory: UnitOfWorkFactory, ticketing_settings: Settings
) -> ReleaseReservationUseCase:
    return ReleaseReservationUseCase(uow_factory=uow_factory, settings=ticketing_settings)


@pytest.fixture
def reap_use_case(
    uow_factory: UnitOfWorkFactory, clock: FrozenClock, ticketing_settings: Settings
) -> ReapExpiredReservationsUseCase:
    return ReapExpiredReservationsUseCase(
        uow_factory=uow_factory, clock=clock, settings=ticketing_settings
    )
