from typing import List

import attrs

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.booking_entity import Booking


@attrs.frozen
class CreateEventResult:
    event_aggregate: EventTicketingAggregate
    generated_promo_codes: List[str]


@attrs.frozen
class ConfirmBookingResult:
    booking: Booking
    # True when the reservation had already been confirmed and the stored booking is returned
    replayed: bool = False
    event_title: str = ''


@attrs.frozen
class ReapSweepResult:
    examined: int = 0
    released: int = 0
    failed: int = 0
