from datetime import datetime, timedelta
import random
import string
from typing import List, Optional

import attrs

from src.service.ticketing.domain.enum.reservation_status import ReservationStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.user_info import UserInfo


_BASE36 = string.digits + string.ascii_lowercase


def generate_reservation_id(now: datetime) -> str:
    """RES-<epoch millis>-<9 base36 chars>"""
    suffix = ''.join(random.choices(_BASE36, k=9))
    return f'RES-{int(now.timestamp() * 1000)}-{suffix}'


@attrs.define
class Reservation:
    """Short-lived hold on seats (and optionally a promo code) outside the Event document."""

    reservation_id: str
    event_id: str
    ticket_type: str
    quantity: int
    seats: List[str]
    unit_price: float
    zone: SeatZone
    user_info: UserInfo
    subtotal: float
    discount: float
    final_amount: float
    created_at: datetime
    expires_at: datetime
    promo_code: Optional[str] = None
    status: ReservationStatus = ReservationStatus.ACTIVE
    booking_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        reservation_id: str,
        event_id: str,
        ticket_type: str,
        quantity: int,
        seats: List[str],
        unit_price: float,
        zone: SeatZone,
        user_info: UserInfo,
        discount: float,
        promo_code: Optional[str],
        now: datetime,
        ttl: timedelta,
    ) -> 'Reservation':
        subtotal = round(unit_price * quantity, 2)
        discount = round(min(discount, subtotal), 2)
        return cls(
            reservation_id=reservation_id,
            event_id=event_id,
            ticket_type=ticket_type,
            quantity=quantity,
            seats=list(seats),
            unit_price=unit_price,
            zone=zone,
            user_info=user_info,
            subtotal=subtotal,
            discount=discount,
            final_amount=round(subtotal - discount, 2),
            created_at=now,
            expires_at=now + ttl,
            promo_code=promo_code,
        )

    def is_expired(self, now: datetime) -> bool:
        # A reservation observed at exactly expires_at is already expired
        return now >= self.expires_at

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    def mark_consumed(self, *, booking_id: str) -> 'Reservation':
        return attrs.evolve(self, status=ReservationStatus.CONSUMED, booking_id=booking_id)
