"""
Production FastAPI Application

Event ticketing service with the reservation reaper running in the background.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.ticketing.driving_adapter.background.reservation_reaper import (
    run_reservation_reaper,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Ticketing] Starting up...')

    tracing = TracingConfig(service_name='event-ticketing')
    tracing.setup()
    Logger.base.info('📊 [Ticketing] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ticketing] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Ticketing] Database engine ready + instrumented')

    settings = container.config_service()
    async with anyio.create_task_group() as tg:
        if settings.REAPER_ENABLED:
            tg.start_soon(run_reservation_reaper)
        else:
            Logger.base.info('⏭️  [Ticketing] Reservation reaper disabled (REAPER_ENABLED=false)')

        Logger.base.info('✅ [Ticketing] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Ticketing] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [Ticketing] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Ticketing] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Ticketing] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
