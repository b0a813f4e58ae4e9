from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.ticketing.domain.entity.reservation_entity import Reservation


class IReservationRepo(ABC):
    """Reservation tokens live outside the event document."""

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: str) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def delete(self, *, reservation_id: str) -> bool:
        pass

    @abstractmethod
    async def list_expired(self, *, now: datetime, limit: int) -> List[Reservation]:
        """Active reservations with expires_at < now, oldest first."""
        pass
