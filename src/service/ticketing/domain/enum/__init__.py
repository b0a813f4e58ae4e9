"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.promo_code_state import PromoCodeState
from src.service.ticketing.domain.enum.reservation_status import ReservationStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.enum.user_role import UserRole

__all__ = [
    'BookingStatus',
    'DiscountType',
    'EventStatus',
    'PaymentMethod',
    'PaymentStatus',
    'PromoCodeState',
    'ReservationStatus',
    'SeatZone',
    'UserRole',
]
