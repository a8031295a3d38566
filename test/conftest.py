"""
Test Configuration and Fixtures

This module provides:
- Test environment (SQLite file database, mock notifications, in-process lock)
- The test FastAPI app and a session-scoped TestClient
- Reservation cleanup between integration tests
- Shared domain fixtures (customer info, slots relative to the restaurant clock)

Architecture:
- Unit tests (@pytest.mark.unit): mocked ports, no database
- Integration tests: real SQLite database through the app or an in-memory engine
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_db_dir = Path(tempfile.mkdtemp(prefix='reservation_test_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_db_dir / "test.db"}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SEED_SAMPLE_TABLES'] = 'true'
    os.environ['TABLE_LOCK_BACKEND'] = 'memory'
    os.environ['NOTIFICATION_BACKEND'] = 'mock'
    os.environ.setdefault('RESTAURANT_TIMEZONE', 'America/Sao_Paulo')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncIterator, Callable, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, time, timedelta  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.clock import local_now  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine  # noqa: E402
from src.platform.logging.loguru_io import Logger  # noqa: E402
from src.service.table_reservation.domain.value_object.customer_info import (  # noqa: E402
    CustomerInfo,
)
from src.service.table_reservation.driven_adapter.table_seeder import (  # noqa: E402
    seed_sample_tables,
)


# =============================================================================
# Test App
# =============================================================================
@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """Minimal lifespan for testing - no Redis, sample tables always seeded."""
    Logger.base.info('🧪 [Test App] Starting up...')

    container.wire(modules=WIRE_MODULES)
    await create_db_and_tables()
    await seed_sample_tables(container.table_repo())
    Logger.base.info('🧪 [Test App] Database ready')

    yield

    await container.event_dispatcher().wait_until_idle()
    await dispose_engine()
    container.unwire()
    Logger.base.info('🧪 [Test App] Shutdown complete')


async def _delete_all_reservations() -> None:
    engine = create_async_engine(os.environ['DATABASE_URL'])
    try:
        async with engine.begin() as conn:
            await conn.execute(text('DELETE FROM reservation'))
    finally:
        await engine.dispose()


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if item.get_closest_marker('api'):
            item.fixturenames.append('clean_reservations')


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    app = create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def clean_reservations(client: TestClient) -> Generator[None, None, None]:
    asyncio.run(_delete_all_reservations())
    yield
    asyncio.run(_delete_all_reservations())


# =============================================================================
# Domain Fixtures
# =============================================================================
@pytest.fixture
def customer_info() -> CustomerInfo:
    return CustomerInfo(
        name='Maria Silva',
        email='maria@example.com',
        phone='(11) 98765-4321',
        special_requests='Window seat',
    )


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed 'now' on a weekday morning, before opening time."""
    return datetime(2025, 7, 14, 9, 0)


@pytest.fixture
def at_day_offset() -> Callable[[int, int, int], datetime]:
    """Slot start `days` after today's date at hour:minute on the restaurant clock."""

    def _at(days: int, hour: int, minute: int = 0) -> datetime:
        return datetime.combine(local_now().date() + timedelta(days=days), time(hour, minute))

    return _at
