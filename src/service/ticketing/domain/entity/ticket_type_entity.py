from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Ticket type {attribute.name} cannot be empty')


def _validate_non_negative(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if value < 0:
        raise ValueError(f'Ticket type {attribute.name} cannot be negative')


@attrs.define
class TicketType:
    """
    Inventory class within an event.

    Counters: total Q, sold s, reserved r; available a = Q - s - r.
    Invariant (always): s >= 0, r >= 0, s + r <= Q.
    """

    name: str = attrs.field(validator=_validate_non_empty_string)
    price: float = attrs.field(converter=float, validator=_validate_non_negative)
    total_quantity: int = attrs.field(validator=_validate_non_negative)
    sold_quantity: int = 0
    reserved_quantity: int = 0
    description: str = ''
    currency: str = 'INR'
    max_per_user: int = 10
    is_active: bool = True
    sale_start: Optional[datetime] = None
    sale_end: Optional[datetime] = None
    zone: SeatZone = attrs.field(default=SeatZone.GENERAL, converter=SeatZone)
    requires_promo_code: bool = False

    @property
    def available_quantity(self) -> int:
        return self.total_quantity - self.sold_quantity - self.reserved_quantity

    def is_on_sale(self, now: datetime) -> bool:
        if self.sale_start and now < self.sale_start:
            return False
        if self.sale_end and now > self.sale_end:
            return False
        return True

    def hold(self, quantity: int) -> None:
        self.reserved_quantity += quantity
        self.check_invariants()

    def release(self, quantity: int) -> None:
        self.reserved_quantity -= quantity
        self.check_invariants()

    def sell_reserved(self, quantity: int) -> None:
        self.reserved_quantity -= quantity
        self.sold_quantity += quantity
        self.check_invariants()

    def refund(self, quantity: int) -> None:
        self.sold_quantity -= quantity
        self.check_invariants()

    def check_invariants(self) -> None:
        if (
            self.sold_quantity < 0
            or self.reserved_quantity < 0
            or self.sold_quantity + self.reserved_quantity > self.total_quantity
        ):
            raise TicketingError(
                TicketingErrorKind.INVENTORY_INCONSISTENT,
                f'Ticket type "{self.name}" counters out of range: '
                f'sold={self.sold_quantity}, reserved={self.reserved_quantity}, '
                f'total={self.total_quantity}',
            )
