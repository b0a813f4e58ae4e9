from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """Repository interface for booking write operations"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Raises:
            DuplicateKeyError: booking_id or reservation_id already has a booking
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_by_reservation_id(self, *, reservation_id: str) -> Optional[Booking]:
        pass
