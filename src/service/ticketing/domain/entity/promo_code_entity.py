"""
Promo code - single-use (or limited-use) discount token owned by an Event

Lifecycle per use:  unused → bound (at reserve) → redeemed (at confirm)
                    bound → unused only through the reaper / explicit release

Invariant: is_used ⇔ used_count >= max_uses
"""

from datetime import datetime
import re
from typing import List, Optional

import attrs

from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.promo_code_state import PromoCodeState
from src.service.ticketing.domain.value_object.user_info import UserInfo


_CODE_PATTERN = re.compile(r'^[A-Z0-9][A-Z0-9-]{2,31}$')


def normalize_code(code: str) -> str:
    return code.strip().upper()


def _validate_code(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not _CODE_PATTERN.match(value):
        raise ValueError(f'Invalid promo code "{value}"')


def _validate_positive(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise ValueError(f'Promo code {attribute.name} must be at least 1')


@attrs.define
class PromoCode:
    code: str = attrs.field(converter=normalize_code, validator=_validate_code)
    discount_type: DiscountType = attrs.field(default=DiscountType.FREE, converter=DiscountType)
    discount_value: float = attrs.field(default=0.0, converter=float)
    max_uses: int = attrs.field(default=1, validator=_validate_positive)
    used_count: int = 0
    is_used: bool = False
    is_active: bool = True
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    # Empty means the code applies to every ticket type
    applicable_ticket_types: List[str] = attrs.field(factory=list)
    description: str = ''
    min_order_value: Optional[float] = None
    seat_number: Optional[str] = None
    used_by: Optional[UserInfo] = None
    used_at: Optional[datetime] = None
    bound_reservation_ids: List[str] = attrs.field(factory=list)
    redeemed_booking_ids: List[str] = attrs.field(factory=list)
    created_at: Optional[datetime] = None

    @property
    def state(self) -> PromoCodeState:
        if self.bound_reservation_ids:
            return PromoCodeState.BOUND
        if self.redeemed_booking_ids:
            return PromoCodeState.REDEEMED
        return PromoCodeState.UNUSED

    def applies_to(self, ticket_type_name: str) -> bool:
        return not self.applicable_ticket_types or ticket_type_name in self.applicable_ticket_types

    def is_valid_at(self, now: datetime) -> bool:
        if self.valid_from and now < self.valid_from:
            return False
        if self.valid_until and now > self.valid_until:
            return False
        return True

    def is_redeemable(self, *, ticket_type_name: str, now: datetime) -> bool:
        return (
            self.is_active
            and not self.is_used
            and self.is_valid_at(now)
            and self.applies_to(ticket_type_name)
        )

    def compute_discount(self, subtotal: float) -> float:
        if self.min_order_value is not None and subtotal < self.min_order_value:
            return 0.0
        match self.discount_type:
            case DiscountType.FREE:
                return subtotal
            case DiscountType.PERCENTAGE:
                return round(subtotal * min(self.discount_value, 100.0) / 100.0, 2)
            case DiscountType.FIXED:
                return min(self.discount_value, subtotal)

    def bind(
        self, *, reservation_id: str, user_info: UserInfo, seat_number: Optional[str], now: datetime
    ) -> None:
        self.used_count += 1
        self.used_by = user_info
        self.used_at = now
        self.seat_number = seat_number
        self.bound_reservation_ids.append(reservation_id)
        self._sync_is_used()

    def is_bound_to(self, reservation_id: str) -> bool:
        return reservation_id in self.bound_reservation_ids

    def redeem(self, *, reservation_id: str, booking_id: str) -> None:
        self.bound_reservation_ids.remove(reservation_id)
        self.redeemed_booking_ids.append(booking_id)

    def unbind(self, *, reservation_id: str) -> None:
        self.bound_reservation_ids.remove(reservation_id)
        self.used_count -= 1
        if not self.bound_reservation_ids and not self.redeemed_booking_ids:
            self.used_by = None
            self.used_at = None
            self.seat_number = None
        self._sync_is_used()

    def _sync_is_used(self) -> None:
        self.is_used = self.used_count >= self.max_uses
