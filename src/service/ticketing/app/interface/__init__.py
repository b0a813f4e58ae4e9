"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
    IEventTicketingCommandRepo,
)
from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
    IEventTicketingQueryRepo,
)
from src.service.ticketing.app.interface.i_notification_sender import INotificationSender
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IEventTicketingCommandRepo',
    'IEventTicketingQueryRepo',
    'INotificationSender',
    'IReservationRepo',
]
