"""Wall clock used by use cases; injected so tests can pin time."""

from datetime import datetime, timezone
from typing import Callable

import uuid_utils


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_entity_id() -> str:
    """Time-ordered opaque identifier (UUID7) for aggregates."""
    return str(uuid_utils.uuid7())
