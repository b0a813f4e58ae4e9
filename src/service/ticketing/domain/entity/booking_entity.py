from datetime import datetime
import random
from typing import List, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from src.service.ticketing.domain.value_object.user_info import UserInfo


def generate_booking_id(now: datetime) -> str:
    """BOOK-<last 6 digits of epoch millis>-<1000..9999>"""
    epoch6 = str(int(now.timestamp() * 1000))[-6:]
    return f'BOOK-{epoch6}-{random.randint(1000, 9999)}'


@attrs.define
class BookingTicket:
    ticket_type: str
    quantity: int
    unit_price: float
    zone: SeatZone
    seat_numbers: List[str] = attrs.field(factory=list)
    promo_code_used: Optional[str] = None


@attrs.define
class BookingPromoCode:
    code: str
    discount_type: DiscountType
    discount_amount: float


@attrs.define
class Booking:
    booking_id: str
    event_id: str
    reservation_id: str
    user_info: UserInfo
    tickets: List[BookingTicket]
    subtotal: float
    discount: float
    total: float
    amount_paid: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    tax: float = 0.0
    promo_code: Optional[BookingPromoCode] = None
    payment_id: Optional[str] = None
    payment_date: Optional[datetime] = None
    booking_status: BookingStatus = BookingStatus.CONFIRMED
    checked_in: bool = False
    check_in_time: Optional[datetime] = None
    check_in_by: Optional[str] = None
    admin_notes: str = ''
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    booking_source: str = 'website'
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def seat_numbers(self) -> List[str]:
        return [seat for ticket in self.tickets for seat in ticket.seat_numbers]

    @property
    def quantity(self) -> int:
        return sum(ticket.quantity for ticket in self.tickets)

    @property
    def is_free(self) -> bool:
        return self.total == 0

    @classmethod
    @Logger.io
    def create_from_reservation(
        cls,
        *,
        booking_id: str,
        reservation: Reservation,
        payment_method: PaymentMethod,
        payment_status: PaymentStatus,
        payment_id: Optional[str],
        promo_discount_type: Optional[DiscountType],
        booking_source: str,
        now: datetime,
    ) -> 'Booking':
        """Snapshot a reservation's line item and totals into a durable booking."""
        promo_code = None
        if reservation.promo_code and promo_discount_type is not None:
            promo_code = BookingPromoCode(
                code=reservation.promo_code,
                discount_type=promo_discount_type,
                discount_amount=reservation.discount,
            )

        paid = payment_status == PaymentStatus.COMPLETED
        return cls(
            booking_id=booking_id,
            event_id=reservation.event_id,
            reservation_id=reservation.reservation_id,
            user_info=reservation.user_info,
            tickets=[
                BookingTicket(
                    ticket_type=reservation.ticket_type,
                    quantity=reservation.quantity,
                    unit_price=reservation.unit_price,
                    zone=reservation.zone,
                    seat_numbers=list(reservation.seats),
                    promo_code_used=reservation.promo_code,
                )
            ],
            subtotal=reservation.subtotal,
            discount=reservation.discount,
            total=reservation.final_amount,
            amount_paid=reservation.final_amount if paid else 0.0,
            promo_code=promo_code,
            payment_method=payment_method,
            payment_status=payment_status,
            payment_id=payment_id,
            payment_date=now if paid else None,
            booking_source=booking_source,
            created_at=now,
            updated_at=now,
        )

    def with_booking_id(self, booking_id: str) -> 'Booking':
        return attrs.evolve(self, booking_id=booking_id)

    def _require_confirmed(self, action: str) -> None:
        if self.booking_status != BookingStatus.CONFIRMED:
            raise TicketingError(
                TicketingErrorKind.INVALID_TRANSITION,
                f'Cannot {action} a booking in status {self.booking_status}',
            )

    @Logger.io
    def cancel(self, *, reason: Optional[str], now: datetime) -> 'Booking':
        self._require_confirmed('cancel')
        return attrs.evolve(
            self,
            booking_status=BookingStatus.CANCELLED,
            cancellation_reason=reason,
            cancelled_at=now,
            updated_at=now,
        )

    @Logger.io
    def check_in(self, *, checked_in_by: str, now: datetime) -> 'Booking':
        self._require_confirmed('check in')
        return attrs.evolve(
            self,
            booking_status=BookingStatus.CHECKED_IN,
            checked_in=True,
            check_in_time=now,
            check_in_by=checked_in_by,
            updated_at=now,
        )

    @Logger.io
    def mark_no_show(self, *, now: datetime) -> 'Booking':
        self._require_confirmed('mark as no-show')
        return attrs.evolve(self, booking_status=BookingStatus.NO_SHOW, updated_at=now)
