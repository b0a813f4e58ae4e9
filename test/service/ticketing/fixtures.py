from functools import partial
from typing import Any

import pytest

from src.platform.config.core_setting import Settings
from src.service.ticketing.app.event_transaction import UnitOfWorkFactory
from test.service.ticketing.in_memory_uow import InMemoryStore, InMemoryUnitOfWork


@pytest.fixture
def event_state() -> dict[str, Any]:
    """Unified state fixture for the event ticketing BDD steps."""
    return {}


@pytest.fixture
def ticketing_settings() -> Settings:
    """Settings for use cases built by hand; short deadline, three retries."""
    return Settings(RESERVATION_MAX_RETRIES=3, STORE_TIMEOUT_SECONDS=2)


@pytest.fixture
def uow_factory(store: InMemoryStore) -> UnitOfWorkFactory:
    return partial(InMemoryUnitOfWork, store)
