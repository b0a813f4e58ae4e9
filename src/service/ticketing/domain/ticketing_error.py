"""
Ticketing error kinds

Every failure the core reports carries a stable machine-readable kind next to
the human message. The HTTP status is derived from the kind.
"""

from enum import StrEnum
from typing import List, Optional

from src.platform.exception.exceptions import DomainError


class TicketingErrorKind(StrEnum):
    EVENT_NOT_FOUND = 'event_not_found'
    UNKNOWN_TICKET_TYPE = 'unknown_ticket_type'
    INACTIVE_TICKET_TYPE = 'inactive_ticket_type'
    PROMO_REQUIRED = 'promo_required'
    INVALID_PROMO = 'invalid_promo'
    PROMO_INVALIDATED = 'promo_invalidated'
    TOO_MANY_FOR_PROMO = 'too_many_for_promo'
    INSUFFICIENT_INVENTORY = 'insufficient_inventory'
    INSUFFICIENT_SEATS_IN_ZONE = 'insufficient_seats_in_zone'
    RESERVATION_EXPIRED = 'reservation_expired'
    RESERVATION_NOT_FOUND = 'reservation_not_found'
    BOOKING_NOT_FOUND = 'booking_not_found'
    SEAT_TAKEN = 'seat_taken'
    INVENTORY_INCONSISTENT = 'inventory_inconsistent'
    INVALID_TRANSITION = 'invalid_transition'
    CONTENTION = 'contention'
    TIMEOUT = 'timeout'
    VALIDATION = 'validation'
    INTERNAL_ERROR = 'internal_error'


_STATUS_BY_KIND: dict[TicketingErrorKind, int] = {
    TicketingErrorKind.EVENT_NOT_FOUND: 404,
    TicketingErrorKind.UNKNOWN_TICKET_TYPE: 404,
    TicketingErrorKind.RESERVATION_NOT_FOUND: 404,
    TicketingErrorKind.BOOKING_NOT_FOUND: 404,
    TicketingErrorKind.CONTENTION: 409,
    TicketingErrorKind.TIMEOUT: 504,
    TicketingErrorKind.INVENTORY_INCONSISTENT: 500,
    TicketingErrorKind.INTERNAL_ERROR: 500,
}


def status_code_for(kind: TicketingErrorKind) -> int:
    return _STATUS_BY_KIND.get(kind, 400)


class TicketingError(DomainError):
    def __init__(
        self,
        kind: TicketingErrorKind,
        message: str,
        *,
        errors: Optional[List[str]] = None,
    ) -> None:
        self.kind = kind
        self.errors = errors
        super().__init__(message, status_code_for(kind))

    def __str__(self) -> str:
        return f'[{self.kind}] {self.message}'
