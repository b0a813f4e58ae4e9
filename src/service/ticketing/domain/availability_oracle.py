"""
Availability Oracle
Read-only answer to "would this reservation succeed right now, and with which seats?"

Checks run in a fixed order and stop at the first failure:
1. ticket type exists and is active (and on sale, when a window is set)
2. promo code supplied when the ticket type requires one
3. supplied promo code is redeemable for this ticket type
4. promo-gated ticket types sell one seat per reservation
5. ticket type inventory covers the quantity
6. the ticket type's zone still has enough free seats

The result is advisory; the reservation manager re-runs it inside the
event transaction.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

import attrs

from src.service.ticketing.domain.entity.promo_code_entity import normalize_code
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.seat_allocator import allocate_seats
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


if TYPE_CHECKING:
    from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
        EventTicketingAggregate,
    )


@attrs.frozen
class AvailabilityCheckResult:
    can_proceed: bool
    ticket_type: str
    quantity: int
    projected_seats: List[str] = attrs.field(factory=list)
    zone: Optional[SeatZone] = None
    unit_price: float = 0.0
    subtotal: float = 0.0
    discount: float = 0.0
    total_price: float = 0.0
    promo_code: Optional[str] = None
    reason: Optional[TicketingErrorKind] = None
    message: Optional[str] = None

    def raise_if_blocked(self) -> None:
        if not self.can_proceed:
            assert self.reason is not None
            raise TicketingError(self.reason, self.message or str(self.reason))


def _fail(
    ticket_type: str, quantity: int, reason: TicketingErrorKind, message: str
) -> AvailabilityCheckResult:
    return AvailabilityCheckResult(
        can_proceed=False,
        ticket_type=ticket_type,
        quantity=quantity,
        reason=reason,
        message=message,
    )


def check_availability(
    *,
    aggregate: 'EventTicketingAggregate',
    ticket_type_name: str,
    quantity: int,
    promo_code: Optional[str],
    now: datetime,
) -> AvailabilityCheckResult:
    if quantity < 1:
        return _fail(
            ticket_type_name, quantity, TicketingErrorKind.VALIDATION, 'Quantity must be at least 1'
        )

    # 1. resolve ticket type
    ticket = aggregate.find_ticket_type(ticket_type_name)
    if ticket is None:
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.UNKNOWN_TICKET_TYPE,
            f'Ticket type "{ticket_type_name}" not found',
        )
    if not ticket.is_active or not ticket.is_on_sale(now):
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.INACTIVE_TICKET_TYPE,
            f'Ticket type "{ticket_type_name}" is not on sale',
        )

    # 2. promo required
    code = normalize_code(promo_code) if promo_code else None
    if ticket.requires_promo_code and not code:
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.PROMO_REQUIRED,
            f'Ticket type "{ticket_type_name}" requires a promo code',
        )

    # 3. promo redeemable
    promo = None
    if code:
        promo = aggregate.find_promo_code(code)
        if promo is None or not promo.is_redeemable(ticket_type_name=ticket.name, now=now):
            return _fail(
                ticket_type_name,
                quantity,
                TicketingErrorKind.INVALID_PROMO,
                'Invalid, expired or already used promo code',
            )

    # 4. one seat per promo-gated reservation
    if ticket.requires_promo_code and quantity > 1:
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.TOO_MANY_FOR_PROMO,
            'Only one ticket can be reserved per promo code',
        )

    # 5. inventory
    if ticket.available_quantity < quantity:
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.INSUFFICIENT_INVENTORY,
            f'Only {ticket.available_quantity} "{ticket.name}" tickets available',
        )

    # 6. seats in zone
    seats = allocate_seats(
        seating_config=aggregate.seating_config,
        admin_holds=aggregate.admin_holds,
        zone=ticket.zone,
        quantity=quantity,
        pending_seats=aggregate.pending_seats.keys(),
    )
    if len(seats) < quantity:
        return _fail(
            ticket_type_name,
            quantity,
            TicketingErrorKind.INSUFFICIENT_SEATS_IN_ZONE,
            f'Only {len(seats)} seats left in the {ticket.zone} zone',
        )

    subtotal = round(ticket.price * quantity, 2)
    discount = promo.compute_discount(subtotal) if promo else 0.0
    return AvailabilityCheckResult(
        can_proceed=True,
        ticket_type=ticket.name,
        quantity=quantity,
        projected_seats=seats,
        zone=ticket.zone,
        unit_price=ticket.price,
        subtotal=subtotal,
        discount=discount,
        total_price=round(subtotal - discount, 2),
        promo_code=promo.code if promo else None,
    )
