from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.driving_adapter.schema.common_schema import (
    CamelModel,
    UserInfoResponse,
)


class ReservationData(CamelModel):
    reservation_id: str
    expires_at: Optional[datetime] = None


class ConfirmBookingRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'reservationData': {
                    'reservationId': 'RES-1767225600000-k3j9x0a1b',
                    'expiresAt': '2026-01-01T00:15:00Z',
                },
                'paymentMethod': 'upi',
                'paymentStatus': 'completed',
                'paymentId': 'pay_123',
            }
        }
    )

    reservation_data: ReservationData
    payment_method: PaymentMethod = PaymentMethod.FREE
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    payment_id: Optional[str] = None


class CancelBookingRequest(CamelModel):
    reason: Optional[str] = None


class BookingTicketResponse(CamelModel):
    ticket_type: str
    quantity: int
    price: float
    seat_type: SeatZone
    seat_numbers: List[str]
    promo_code_used: Optional[str]


class BookingPromoCodeResponse(CamelModel):
    code: str
    discount_type: DiscountType
    discount_amount: float


class BookingResponse(CamelModel):
    booking_id: str
    event_id: str
    event_title: str = ''
    reservation_id: str
    user_info: Optional[UserInfoResponse]
    tickets: List[BookingTicketResponse]
    ticket_type: str
    quantity: int
    seat_numbers: List[str]
    seat_type: SeatZone
    subtotal: float
    discount: float
    tax: float
    total_amount: float
    amount_paid: float
    promo_code: Optional[BookingPromoCodeResponse]
    promo_code_used: Optional[str]
    is_promo_code_used: bool
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    payment_id: Optional[str]
    payment_date: Optional[datetime]
    booking_status: BookingStatus
    checked_in: bool
    check_in_time: Optional[datetime]
    cancellation_reason: Optional[str]
    cancelled_at: Optional[datetime]
    booking_source: str
    booking_date: Optional[datetime]

    @classmethod
    def from_domain(cls, booking: Booking, *, event_title: str = '') -> 'BookingResponse':
        # A booking carries exactly one line item
        line = booking.tickets[0]
        return cls(
            booking_id=booking.booking_id,
            event_id=booking.event_id,
            event_title=event_title,
            reservation_id=booking.reservation_id,
            user_info=UserInfoResponse.from_domain(booking.user_info),
            tickets=[
                BookingTicketResponse(
                    ticket_type=ticket.ticket_type,
                    quantity=ticket.quantity,
                    price=ticket.unit_price,
                    seat_type=ticket.zone,
                    seat_numbers=list(ticket.seat_numbers),
                    promo_code_used=ticket.promo_code_used,
                )
                for ticket in booking.tickets
            ],
            ticket_type=line.ticket_type,
            quantity=booking.quantity,
            seat_numbers=booking.seat_numbers,
            seat_type=line.zone,
            subtotal=booking.subtotal,
            discount=booking.discount,
            tax=booking.tax,
            total_amount=booking.total,
            amount_paid=booking.amount_paid,
            promo_code=(
                BookingPromoCodeResponse(
                    code=booking.promo_code.code,
                    discount_type=booking.promo_code.discount_type,
                    discount_amount=booking.promo_code.discount_amount,
                )
                if booking.promo_code
                else None
            ),
            promo_code_used=line.promo_code_used,
            is_promo_code_used=line.promo_code_used is not None,
            payment_method=booking.payment_method,
            payment_status=booking.payment_status,
            payment_id=booking.payment_id,
            payment_date=booking.payment_date,
            booking_status=booking.booking_status,
            checked_in=booking.checked_in,
            check_in_time=booking.check_in_time,
            cancellation_reason=booking.cancellation_reason,
            cancelled_at=booking.cancelled_at,
            booking_source=booking.booking_source,
            booking_date=booking.created_at,
        )
