"""
Reservation reaper loop

Runs one sweep of ReapExpiredReservationsUseCase every REAPER_INTERVAL_SECONDS
inside the app lifespan task group. A failed sweep is logged and the loop keeps
going; the next sweep picks up whatever was left.
"""

import anyio

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.reap_expired_reservations_use_case import (
    ReapExpiredReservationsUseCase,
)


def build_reap_use_case() -> ReapExpiredReservationsUseCase:
    return ReapExpiredReservationsUseCase(
        uow_factory=container.uow.provider,
        clock=container.clock(),
        settings=container.config_service(),
    )


async def run_reservation_reaper() -> None:
    settings = container.config_service()
    interval = settings.REAPER_INTERVAL_SECONDS
    use_case = build_reap_use_case()
    Logger.base.info(f'🧹 [REAPER] Started, sweeping every {interval}s')

    while True:
        try:
            await use_case.reap()
        except Exception as e:
            Logger.base.exception(f'❌ [REAPER] Sweep failed: {e}')
        await anyio.sleep(interval)
