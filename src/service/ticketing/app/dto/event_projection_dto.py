"""
Read models projected from the event aggregate: seat map, promo code
inventory and the per-event analytics report. Pure, no I/O.
"""

from datetime import datetime
from typing import Dict, List, Optional

import attrs

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.seating_config import format_seat_id, row_letter
from src.service.ticketing.domain.value_object.user_info import UserInfo


def _percentage(part: float, whole: float) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


# ---------------------------------------------------------------------------
# Seat map
# ---------------------------------------------------------------------------


@attrs.frozen
class SeatCell:
    seat_number: str
    row: str
    number: int
    zone: SeatZone
    is_reserved: bool
    is_occupied: bool
    reserved_for: Optional[UserInfo] = None
    promo_code_used: Optional[str] = None


@attrs.frozen
class SeatMapRow:
    row: str
    seats: List[SeatCell]


@attrs.frozen
class TicketAvailability:
    name: str
    zone: SeatZone
    price: float
    total_quantity: int
    sold_quantity: int
    reserved_quantity: int
    available_quantity: int
    requires_promo_code: bool


@attrs.frozen
class PromoCodeStats:
    total: int
    used: int
    available: int


@attrs.frozen
class SeatMapView:
    event_id: str
    event_title: str
    venue_name: str
    rows: List[SeatMapRow]
    ticket_availability: List[TicketAvailability]
    promo_code_stats: PromoCodeStats
    total_seats: int
    available_seats: int
    booked_seats: int

    @classmethod
    def from_aggregate(cls, aggregate: EventTicketingAggregate) -> 'SeatMapView':
        config = aggregate.seating_config
        holds = {hold.seat_number: hold for hold in aggregate.admin_holds}

        rows = []
        for row in range(1, config.total_rows + 1):
            cells = []
            for number in range(1, config.seats_per_row + 1):
                seat_number = format_seat_id(row, number)
                hold = holds.get(seat_number)
                cells.append(
                    SeatCell(
                        seat_number=seat_number,
                        row=row_letter(row),
                        number=number,
                        zone=config.zone_of_row(row),
                        is_reserved=hold is not None or seat_number in aggregate.pending_seats,
                        is_occupied=hold.is_occupied if hold else False,
                        reserved_for=hold.reserved_for if hold else None,
                        promo_code_used=hold.promo_code_used if hold else None,
                    )
                )
            rows.append(SeatMapRow(row=row_letter(row), seats=cells))

        return cls(
            event_id=aggregate.event_id,
            event_title=aggregate.event.title,
            venue_name=aggregate.event.venue_name,
            rows=rows,
            ticket_availability=ticket_availability(aggregate),
            promo_code_stats=PromoCodeStats(
                total=len(aggregate.promo_codes),
                used=sum(1 for promo in aggregate.promo_codes if promo.is_used),
                available=sum(1 for promo in aggregate.promo_codes if not promo.is_used),
            ),
            total_seats=config.seat_count(),
            available_seats=sum(ticket.available_quantity for ticket in aggregate.ticket_types),
            booked_seats=sum(ticket.sold_quantity for ticket in aggregate.ticket_types),
        )


def ticket_availability(aggregate: EventTicketingAggregate) -> List[TicketAvailability]:
    return [
        TicketAvailability(
            name=ticket.name,
            zone=ticket.zone,
            price=ticket.price,
            total_quantity=ticket.total_quantity,
            sold_quantity=ticket.sold_quantity,
            reserved_quantity=ticket.reserved_quantity,
            available_quantity=ticket.available_quantity,
            requires_promo_code=ticket.requires_promo_code,
        )
        for ticket in aggregate.ticket_types
    ]


# ---------------------------------------------------------------------------
# Promo code inventory
# ---------------------------------------------------------------------------


@attrs.frozen
class AvailablePromoCode:
    code: str
    description: str
    valid_until: Optional[datetime]
    zone: Optional[SeatZone]


@attrs.frozen
class UsedPromoCode:
    code: str
    used_by: Optional[UserInfo]
    used_at: Optional[datetime]
    seat_number: Optional[str]


@attrs.frozen
class PromoCodeInventory:
    total_generated: int
    available: int
    used: int
    available_codes: List[AvailablePromoCode]
    used_codes: List[UsedPromoCode]

    @classmethod
    def from_aggregate(
        cls, aggregate: EventTicketingAggregate, *, now: datetime
    ) -> 'PromoCodeInventory':
        available, used = [], []
        for promo in aggregate.promo_codes:
            if promo.is_used:
                used.append(
                    UsedPromoCode(
                        code=promo.code,
                        used_by=promo.used_by,
                        used_at=promo.used_at,
                        seat_number=promo.seat_number,
                    )
                )
            elif promo.is_active and promo.is_valid_at(now):
                # Zone of the first ticket type the code unlocks
                gated = [
                    ticket for ticket in aggregate.ticket_types if promo.applies_to(ticket.name)
                ]
                available.append(
                    AvailablePromoCode(
                        code=promo.code,
                        description=promo.description,
                        valid_until=promo.valid_until,
                        zone=gated[0].zone if gated else None,
                    )
                )
        return cls(
            total_generated=len(aggregate.promo_codes),
            available=len(available),
            used=len(used),
            available_codes=available,
            used_codes=used,
        )


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


@attrs.frozen
class AnalyticsOverview:
    total_views: int
    total_bookings: int
    total_revenue: float
    conversion_rate: float


@attrs.frozen
class TicketAnalytics:
    name: str
    zone: SeatZone
    total_quantity: int
    sold_quantity: int
    reserved_quantity: int
    available_quantity: int
    sold_percentage: float
    revenue: float
    requires_promo_code: bool


@attrs.frozen
class SeatOccupancy:
    total_seats: int
    reserved_seats: int
    occupied_seats: int
    available_seats: int


@attrs.frozen
class PromoCodeAnalytics:
    total_promo_codes: int
    used_promo_codes: int
    available_promo_codes: int
    usage_rate: float


@attrs.frozen
class BookingStats:
    total_bookings: int
    paid_bookings: int
    free_bookings: int
    checked_in: int
    cancelled: int


@attrs.frozen
class EventAnalyticsReport:
    event_id: str
    title: str
    overview: AnalyticsOverview
    ticket_analytics: List[TicketAnalytics]
    seat_occupancy: SeatOccupancy
    promo_code_analytics: PromoCodeAnalytics
    booking_stats: BookingStats
    revenue_by_ticket_type: Dict[str, float]

    @classmethod
    def from_aggregate(
        cls, aggregate: EventTicketingAggregate, *, bookings: List[Booking]
    ) -> 'EventAnalyticsReport':
        analytics = aggregate.analytics
        total_seats = aggregate.seating_config.seat_count()
        reserved_seats = len(aggregate.admin_holds) + len(aggregate.pending_seats)
        used_codes = sum(1 for promo in aggregate.promo_codes if promo.is_used)

        return cls(
            event_id=aggregate.event_id,
            title=aggregate.event.title,
            overview=AnalyticsOverview(
                total_views=analytics.total_views,
                total_bookings=analytics.total_bookings,
                total_revenue=analytics.total_revenue,
                conversion_rate=_percentage(analytics.total_bookings, analytics.total_views),
            ),
            ticket_analytics=[
                TicketAnalytics(
                    name=ticket.name,
                    zone=ticket.zone,
                    total_quantity=ticket.total_quantity,
                    sold_quantity=ticket.sold_quantity,
                    reserved_quantity=ticket.reserved_quantity,
                    available_quantity=ticket.available_quantity,
                    sold_percentage=_percentage(ticket.sold_quantity, ticket.total_quantity),
                    revenue=round(ticket.sold_quantity * ticket.price, 2),
                    requires_promo_code=ticket.requires_promo_code,
                )
                for ticket in aggregate.ticket_types
            ],
            seat_occupancy=SeatOccupancy(
                total_seats=total_seats,
                reserved_seats=reserved_seats,
                occupied_seats=sum(1 for hold in aggregate.admin_holds if hold.is_occupied),
                available_seats=total_seats - reserved_seats,
            ),
            promo_code_analytics=PromoCodeAnalytics(
                total_promo_codes=len(aggregate.promo_codes),
                used_promo_codes=used_codes,
                available_promo_codes=len(aggregate.promo_codes) - used_codes,
                usage_rate=_percentage(used_codes, len(aggregate.promo_codes)),
            ),
            booking_stats=BookingStats(
                total_bookings=len(bookings),
                paid_bookings=sum(1 for booking in bookings if booking.total > 0),
                free_bookings=sum(1 for booking in bookings if booking.is_free),
                checked_in=sum(1 for booking in bookings if booking.checked_in),
                cancelled=sum(
                    1 for booking in bookings if booking.booking_status == BookingStatus.CANCELLED
                ),
            ),
            revenue_by_ticket_type={
                ticket.name: round(ticket.sold_quantity * ticket.price, 2)
                for ticket in aggregate.ticket_types
            },
        )
