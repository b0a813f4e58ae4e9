from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.ticketing.app.dto.event_list_filter import EventListFilter
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)


class IEventTicketingQueryRepo(ABC):
    """Event Ticketing Query Repository Interface - CQRS Read Side"""

    @abstractmethod
    async def get_by_id(self, *, event_id: str) -> Optional[EventTicketingAggregate]:
        pass

    @abstractmethod
    async def list_events(
        self, *, event_filter: EventListFilter
    ) -> Tuple[List[EventTicketingAggregate], int]:
        """Return one page of matching events and the total number of matches."""
        pass

    @abstractmethod
    async def increment_views(self, *, event_id: str) -> None:
        """Bump the view counter without touching the aggregate version."""
        pass
