"""
Event Ticketing Command Repository Interface - CQRS Write Side

[Design Principles]
- Operate on the Event Aggregate as the unit
- Saving an aggregate is guarded by its version (optimistic concurrency)
- Runs inside the caller's unit of work; the repository never commits
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)


class IEventTicketingCommandRepo(ABC):
    """Event Ticketing Command Repository Interface - CQRS Write Side"""

    @abstractmethod
    async def get_by_id(self, *, event_id: str) -> Optional[EventTicketingAggregate]:
        """Load the aggregate for a read-modify-write cycle (carries the current version)."""
        pass

    @abstractmethod
    async def create(self, *, event_aggregate: EventTicketingAggregate) -> EventTicketingAggregate:
        """
        Insert a new aggregate

        Returns:
            Saved aggregate (event id assigned, version 1)
        """
        pass

    @abstractmethod
    async def update(self, *, event_aggregate: EventTicketingAggregate) -> EventTicketingAggregate:
        """
        Save an aggregate loaded through get_by_id

        Raises:
            ConcurrencyConflictError: another writer saved the event since it was read
        """
        pass

    @abstractmethod
    async def delete(self, *, event_id: str) -> bool:
        pass
