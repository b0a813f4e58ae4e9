from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.booking_entity import Booking


class INotificationSender(ABC):
    """Fire-and-forget delivery of booking notifications (email / SMS gateways live outside)."""

    @abstractmethod
    async def send_booking_confirmation(self, *, booking: Booking, event_title: str) -> None:
        pass

    @abstractmethod
    async def send_booking_cancellation(self, *, booking: Booking, event_title: str) -> None:
        pass
