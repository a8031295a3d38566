"""
Production FastAPI Application

Restaurant table reservation service.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger
from src.platform.state.redis_client import redis_client
from src.service.table_reservation.driven_adapter.table_seeder import seed_sample_tables


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Reservation Service] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reservation Service] Dependency injection wired')

    # Initialize database schema
    await create_db_and_tables()
    Logger.base.info('🗄️  [Reservation Service] Database schema ready')

    if settings.SEED_SAMPLE_TABLES:
        await seed_sample_tables(container.table_repo())

    # Redis is only needed by the distributed table lock (fail-fast)
    if settings.TABLE_LOCK_BACKEND == 'redis':
        await redis_client.initialize()
        Logger.base.info('📡 [Reservation Service] Redis initialized')

    Logger.base.info('✅ [Reservation Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Reservation Service] Shutting down...')

    # Let in-flight notifications finish
    await container.event_dispatcher().wait_until_idle()
    Logger.base.info('📨 [Reservation Service] Pending notifications flushed')

    await dispose_engine()
    Logger.base.info('🗄️  [Reservation Service] Database engine disposed')

    await redis_client.disconnect()

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
