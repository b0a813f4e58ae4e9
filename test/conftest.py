"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- In-memory store + frozen clock wired into the DI container for API / BDD tests
- PostgreSQL setup and cleanup for repository tests marked `db`
- BDD step definitions (imported from bdd_steps_loader.py)

Architecture:
- Unit tests (test/**/unit/): pure in-process, build use cases by hand
- API / BDD tests: drive the FastAPI app through TestClient over the in-memory store
- Repository tests (@pytest.mark.db): real PostgreSQL, skipped when unreachable
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'event_ticketing_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'event_ticketing_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # The reaper is driven explicitly by the tests
    os.environ['REAPER_ENABLED'] = 'false'
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
import anyio  # noqa: E402
from dependency_injector import providers  # noqa: E402
from dotenv import load_dotenv  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.constant.path import ALEMBIC_INI  # noqa: E402
from test.service.ticketing.in_memory_uow import InMemoryStore, InMemoryUnitOfWork  # noqa: E402
from test.shared.utils import FrozenClock  # noqa: E402
from test.util_constant import TEST_NOW  # noqa: E402


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'db' in markers:
            item.fixturenames.append('clean_database')


# =============================================================================
# In-memory backend (API and BDD tests)
# =============================================================================
@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(TEST_NOW)


@pytest.fixture(autouse=True)
def in_memory_backend(
    request: pytest.FixtureRequest, store: InMemoryStore, clock: FrozenClock
) -> Generator[None, None, None]:
    markers = [m.name for m in request.node.iter_markers()]
    if 'unit' in markers or 'db' in markers:
        yield
        return

    container.uow.override(providers.Factory(InMemoryUnitOfWork, store=store))
    container.clock.override(providers.Object(clock))
    container.notification_sender().sent_messages.clear()
    try:
        yield
    finally:
        container.uow.reset_override()
        container.clock.reset_override()


@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def sent_notifications() -> list[dict[str, Any]]:
    return container.notification_sender().sent_messages


# =============================================================================
# Database Configuration (repository tests)
# =============================================================================
def _get_db_config() -> dict[str, str]:
    env_file = '.env' if Path('.env').exists() else '.env.example'
    load_dotenv(env_file)

    return {
        'user': os.getenv('POSTGRES_USER', 'postgres'),
        'password': os.getenv('POSTGRES_PASSWORD', 'postgres'),
        'host': os.getenv('POSTGRES_SERVER', 'localhost'),
        'port': os.getenv('POSTGRES_PORT', '5432'),
        'test_db': os.environ['POSTGRES_DB'],
    }


def _get_test_database_url() -> str:
    cfg = _get_db_config()
    return (
        f'postgresql+asyncpg://{cfg["user"]}:{cfg["password"]}'
        f'@{cfg["host"]}:{cfg["port"]}/{cfg["test_db"]}'
    )


async def _setup_test_database() -> None:
    db_url = _get_test_database_url()
    cfg = _get_db_config()

    # Create database if not exists
    postgres_url = db_url.replace(f'/{cfg["test_db"]}', '/postgres')
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': cfg['test_db']}
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE {cfg["test_db"]}'))
    finally:
        await engine.dispose()

    # Reset schema and run migrations
    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


def _run_migrations() -> None:
    alembic_cfg = Config(str(ALEMBIC_INI))
    command.upgrade(alembic_cfg, 'head')


_database_ready: bool | None = None


@pytest.fixture
async def test_database() -> AsyncGenerator[None, None]:
    global _database_ready
    if _database_ready is None:
        try:
            await _setup_test_database()
            _database_ready = True
        except (OSError, SQLAlchemyError) as e:
            _database_ready = False
            pytest.skip(f'PostgreSQL is not reachable: {e}')
        # alembic's async env runs its own event loop
        await anyio.to_thread.run_sync(_run_migrations)
    elif not _database_ready:
        pytest.skip('PostgreSQL is not reachable')
    yield


@pytest.fixture
async def clean_database(test_database: None) -> AsyncGenerator[None, None]:
    engine = create_async_engine(_get_test_database_url())
    try:
        async with engine.begin() as conn:
            await conn.execute(text('TRUNCATE booking, reservation, event RESTART IDENTITY'))
    finally:
        await engine.dispose()

    yield

    from src.platform.database.orm_db_setting import dispose_engine

    await dispose_engine()


# =============================================================================
# Load BDD steps
# =============================================================================
from test.bdd_steps_loader import *  # noqa: E402, F401, F403
