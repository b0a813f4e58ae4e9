"""
Event Ticketing Aggregate - Aggregate Root for Event Ticketing

[DDD Design Principles]
- EventTicketingAggregate is the Aggregate Root and the unit of transactional isolation
- Ticket types, promo codes, admin holds, seating and analytics live inside it
- Reservations and bookings live outside and only reference the event by id

[Business Invariants]
- Per ticket type: sold >= 0, reserved >= 0, sold + reserved <= total
- Per promo code: is_used <=> used_count >= max_uses
- A seat identifier appears at most once across admin holds and pending reservation seats
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.availability_oracle import (
    AvailabilityCheckResult,
    check_availability,
)
from src.service.ticketing.domain.entity.admin_hold_entity import SYSTEM_RESERVER, AdminHold
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.promo_code_entity import PromoCode, normalize_code
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.entity.ticket_type_entity import TicketType
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.promo_code_generator import (
    DEFAULT_MAX_ATTEMPTS,
    generate_unique_codes,
    random_code,
)
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from src.service.ticketing.domain.value_object.seating_config import (
    SeatingConfig,
    canonical_seat_id,
)
from src.service.ticketing.domain.value_object.user_info import UserInfo


PAID_TICKET_NAME = 'Paid Ticket'
CODE_TICKET_NAME = 'Code Ticket'
DEFAULT_PAID_TICKET_COUNT = 15
DEFAULT_CODE_TICKET_COUNT = 15

# Descriptive fields an update may touch; inventory is never edited through update_details
UPDATABLE_EVENT_FIELDS = frozenset(
    {
        'title',
        'short_description',
        'description',
        'category',
        'tags',
        'event_type',
        'mode',
        'language',
        'start_date',
        'end_date',
        'registration_deadline',
        'venue_name',
        'address',
        'city',
        'state',
        'country',
        'pin_code',
        'geo_location',
        'banner_url',
        'thumbnail_url',
        'gallery_urls',
        'is_featured',
        'age_restriction',
    }
)


@attrs.define
class EventAnalytics:
    total_views: int = 0
    total_bookings: int = 0
    total_revenue: float = 0.0


def default_ticket_types(
    *,
    paid_ticket_count: int,
    paid_ticket_price: float,
    code_ticket_count: int,
    paid_ticket_zone: SeatZone = SeatZone.FRONT,
    code_ticket_zone: SeatZone = SeatZone.BACK,
) -> List[TicketType]:
    ticket_types = []
    if paid_ticket_count > 0:
        ticket_types.append(
            TicketType(
                name=PAID_TICKET_NAME,
                description='Regular paid ticket with front row seating',
                price=paid_ticket_price,
                total_quantity=paid_ticket_count,
                max_per_user=5,
                zone=paid_ticket_zone,
            )
        )
    if code_ticket_count > 0:
        ticket_types.append(
            TicketType(
                name=CODE_TICKET_NAME,
                description='Free ticket with promo code - back row seating',
                price=0,
                total_quantity=code_ticket_count,
                max_per_user=1,
                zone=code_ticket_zone,
                requires_promo_code=True,
            )
        )
    return ticket_types


@attrs.define
class EventTicketingAggregate:
    # Event entity (descriptive fields)
    event: Event

    seating_config: SeatingConfig = attrs.field(factory=SeatingConfig)
    ticket_types: List[TicketType] = attrs.field(factory=list)
    promo_codes: List[PromoCode] = attrs.field(factory=list)
    admin_holds: List[AdminHold] = attrs.field(factory=list)

    # Seats held by active reservations: seat_number -> reservation_id
    pending_seats: Dict[str, str] = attrs.field(factory=dict)

    analytics: EventAnalytics = attrs.field(factory=EventAnalytics)

    # Optimistic concurrency token; bumped by the store on every successful save
    version: int = 0

    @classmethod
    @Logger.io
    def create_event_with_tickets(
        cls,
        *,
        event: Event,
        seating_config: SeatingConfig,
        now: datetime,
        ticket_types: Optional[List[TicketType]] = None,
        paid_ticket_count: int = DEFAULT_PAID_TICKET_COUNT,
        paid_ticket_price: float = 0.0,
        code_ticket_count: int = DEFAULT_CODE_TICKET_COUNT,
        promo_code_validity: timedelta = timedelta(days=30),
        promo_code_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        code_source=random_code,
    ) -> 'EventTicketingAggregate':
        """
        Create event with ticket types and its free promo code pool - Aggregate root factory method

        One single-use free code is generated per seat of every promo-gated ticket type.
        """
        date_errors = event.date_errors()
        if date_errors:
            raise TicketingError(TicketingErrorKind.VALIDATION, 'Invalid event dates', errors=date_errors)

        if ticket_types is None:
            ticket_types = default_ticket_types(
                paid_ticket_count=paid_ticket_count,
                paid_ticket_price=paid_ticket_price,
                code_ticket_count=code_ticket_count,
            )
        cls._validate_ticket_types(ticket_types)

        event = attrs.evolve(event, created_at=now, updated_at=now)
        aggregate = cls(event=event, seating_config=seating_config, ticket_types=list(ticket_types))

        gated = [ticket for ticket in ticket_types if ticket.requires_promo_code]
        code_count = sum(ticket.total_quantity for ticket in gated)
        codes = generate_unique_codes(
            count=code_count,
            existing=set(),
            max_attempts=promo_code_max_attempts,
            code_source=code_source,
        )
        aggregate.promo_codes = [
            PromoCode(
                code=code,
                discount_type=DiscountType.FREE,
                discount_value=0,
                max_uses=1,
                valid_from=now,
                valid_until=now + promo_code_validity,
                applicable_ticket_types=[ticket.name for ticket in gated],
                description=f'Free ticket code #{index} - One time use only',
                created_at=now,
            )
            for index, code in enumerate(codes, start=1)
        ]

        Logger.base.info(
            f'🎫 [Event] Created "{event.title}" with {len(ticket_types)} ticket types '
            f'and {len(codes)} promo codes'
        )
        return aggregate

    @staticmethod
    def _validate_ticket_types(ticket_types: Iterable[TicketType]) -> None:
        names = [ticket.name for ticket in ticket_types]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise TicketingError(
                TicketingErrorKind.VALIDATION,
                'Ticket type names must be unique',
                errors=[f'duplicate ticket type "{name}"' for name in duplicates],
            )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def event_id(self) -> str:
        return self.event.id

    def find_ticket_type(self, name: str) -> Optional[TicketType]:
        return next((ticket for ticket in self.ticket_types if ticket.name == name), None)

    def find_promo_code(self, code: str) -> Optional[PromoCode]:
        normalized = normalize_code(code)
        return next((promo for promo in self.promo_codes if promo.code == normalized), None)

    def find_hold(self, seat_number: str) -> Optional[AdminHold]:
        return next((hold for hold in self.admin_holds if hold.seat_number == seat_number), None)

    def is_seat_taken(self, seat_number: str) -> bool:
        return seat_number in self.pending_seats or self.find_hold(seat_number) is not None

    @property
    def is_sold_out(self) -> bool:
        return bool(self.ticket_types) and all(
            ticket.available_quantity <= 0 for ticket in self.ticket_types
        )

    def price_range(self) -> Tuple[Optional[float], Optional[float]]:
        prices = [ticket.price for ticket in self.ticket_types if ticket.is_active]
        if not prices:
            return None, None
        return min(prices), max(prices)

    # ------------------------------------------------------------------
    # Reservation lifecycle
    # ------------------------------------------------------------------

    def check_availability(
        self, *, ticket_type_name: str, quantity: int, promo_code: Optional[str], now: datetime
    ) -> AvailabilityCheckResult:
        return check_availability(
            aggregate=self,
            ticket_type_name=ticket_type_name,
            quantity=quantity,
            promo_code=promo_code,
            now=now,
        )

    @Logger.io
    def reserve(
        self,
        *,
        reservation_id: str,
        ticket_type_name: str,
        quantity: int,
        promo_code: Optional[str],
        user_info: UserInfo,
        now: datetime,
        ttl: timedelta,
    ) -> Reservation:
        result = self.check_availability(
            ticket_type_name=ticket_type_name, quantity=quantity, promo_code=promo_code, now=now
        )
        result.raise_if_blocked()

        ticket = self.find_ticket_type(ticket_type_name)
        assert ticket is not None and result.zone is not None

        if result.promo_code:
            promo = self.find_promo_code(result.promo_code)
            assert promo is not None
            promo.bind(
                reservation_id=reservation_id,
                user_info=user_info,
                seat_number=result.projected_seats[0],
                now=now,
            )

        ticket.hold(quantity)
        for seat in result.projected_seats:
            self.pending_seats[seat] = reservation_id

        return Reservation.create(
            reservation_id=reservation_id,
            event_id=self.event_id,
            ticket_type=ticket.name,
            quantity=quantity,
            seats=result.projected_seats,
            unit_price=result.unit_price,
            zone=result.zone,
            user_info=user_info,
            discount=result.discount,
            promo_code=result.promo_code,
            now=now,
            ttl=ttl,
        )

    def holds_reservation(self, reservation: Reservation) -> bool:
        return bool(reservation.seats) and all(
            self.pending_seats.get(seat) == reservation.reservation_id for seat in reservation.seats
        )

    @Logger.io
    def confirm_reservation(
        self, *, reservation: Reservation, booking_id: str, now: datetime
    ) -> Optional[DiscountType]:
        """
        Turn a reservation's held seats into sold, occupied seats.

        Returns the discount type of the redeemed promo code (None without a code).
        """
        ticket = self.find_ticket_type(reservation.ticket_type)
        if ticket is None:
            raise TicketingError(
                TicketingErrorKind.UNKNOWN_TICKET_TYPE,
                f'Ticket type "{reservation.ticket_type}" not found',
            )

        if not self.holds_reservation(reservation):
            raise TicketingError(
                TicketingErrorKind.RESERVATION_EXPIRED,
                f'Reservation {reservation.reservation_id} no longer holds its seats',
            )

        promo = None
        if reservation.promo_code:
            promo = self.find_promo_code(reservation.promo_code)
            if promo is None or not promo.is_bound_to(reservation.reservation_id):
                raise TicketingError(
                    TicketingErrorKind.PROMO_INVALIDATED,
                    f'Promo code {reservation.promo_code} is no longer bound to this reservation',
                )

        ticket.sell_reserved(reservation.quantity)

        for seat in reservation.seats:
            del self.pending_seats[seat]
            self.admin_holds.append(
                AdminHold(
                    seat_number=seat,
                    ticket_type=ticket.name,
                    reserved_for=reservation.user_info,
                    is_occupied=True,
                    promo_code_used=reservation.promo_code,
                    reserved_by=SYSTEM_RESERVER,
                    booking_id=booking_id,
                    reserved_at=now,
                )
            )

        if promo is not None:
            promo.redeem(reservation_id=reservation.reservation_id, booking_id=booking_id)

        self.analytics.total_bookings += 1
        self.analytics.total_revenue = round(
            self.analytics.total_revenue + reservation.final_amount, 2
        )
        return promo.discount_type if promo is not None else None

    @Logger.io
    def release_reservation(self, *, reservation: Reservation) -> bool:
        """
        Undo a reservation that was never confirmed.

        Idempotent: a reservation whose seats are no longer pending is a no-op (returns False).
        """
        if not self.holds_reservation(reservation):
            return False

        ticket = self.find_ticket_type(reservation.ticket_type)
        if ticket is not None:
            ticket.release(reservation.quantity)

        for seat in reservation.seats:
            self.pending_seats.pop(seat, None)

        if reservation.promo_code:
            promo = self.find_promo_code(reservation.promo_code)
            if promo is not None and promo.is_bound_to(reservation.reservation_id):
                promo.unbind(reservation_id=reservation.reservation_id)
        return True

    # ------------------------------------------------------------------
    # Booking cancellation
    # ------------------------------------------------------------------

    @Logger.io
    def cancel_booking(self, *, booking: Booking) -> None:
        """Return a confirmed booking's seats and inventory; its promo code stays redeemed."""
        self.admin_holds = [
            hold
            for hold in self.admin_holds
            if not (hold.is_occupied and hold.booking_id == booking.booking_id)
        ]
        for line in booking.tickets:
            ticket = self.find_ticket_type(line.ticket_type)
            if ticket is not None:
                ticket.refund(line.quantity)

        self.analytics.total_bookings = max(self.analytics.total_bookings - 1, 0)
        self.analytics.total_revenue = max(round(self.analytics.total_revenue - booking.total, 2), 0.0)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    @Logger.io
    def add_admin_hold(
        self,
        *,
        seat_number: str,
        ticket_type_name: str,
        reserved_for: UserInfo,
        reserved_by: str,
        now: datetime,
        notes: str = '',
        promo_code_used: Optional[str] = None,
    ) -> AdminHold:
        seat_number = canonical_seat_id(seat_number)
        if not self.seating_config.contains_seat(seat_number):
            raise TicketingError(
                TicketingErrorKind.VALIDATION, f'Seat {seat_number} does not exist in this venue'
            )
        if self.find_ticket_type(ticket_type_name) is None:
            raise TicketingError(
                TicketingErrorKind.UNKNOWN_TICKET_TYPE, f'Ticket type "{ticket_type_name}" not found'
            )
        if self.is_seat_taken(seat_number):
            raise TicketingError(TicketingErrorKind.SEAT_TAKEN, f'Seat {seat_number} is already reserved')

        hold = AdminHold(
            seat_number=seat_number,
            ticket_type=ticket_type_name,
            reserved_for=reserved_for,
            is_occupied=False,
            promo_code_used=normalize_code(promo_code_used) if promo_code_used else None,
            reserved_by=reserved_by,
            notes=notes,
            reserved_at=now,
        )
        self.admin_holds.append(hold)
        return hold

    @Logger.io
    def add_promo_code(
        self,
        *,
        code: str,
        now: datetime,
        discount_type: DiscountType = DiscountType.FREE,
        discount_value: float = 0.0,
        max_uses: int = 1,
        valid_from: Optional[datetime] = None,
        valid_until: Optional[datetime] = None,
        applicable_ticket_types: Optional[List[str]] = None,
        description: str = '',
        min_order_value: Optional[float] = None,
    ) -> PromoCode:
        if self.find_promo_code(code) is not None:
            raise TicketingError(
                TicketingErrorKind.VALIDATION, f'Promo code {normalize_code(code)} already exists'
            )
        unknown = [
            name for name in applicable_ticket_types or [] if self.find_ticket_type(name) is None
        ]
        if unknown:
            raise TicketingError(
                TicketingErrorKind.UNKNOWN_TICKET_TYPE,
                f'Ticket type "{unknown[0]}" not found',
            )
        if valid_from and valid_until and valid_until <= valid_from:
            raise TicketingError(TicketingErrorKind.VALIDATION, 'validUntil must be after validFrom')

        try:
            promo = PromoCode(
                code=code,
                discount_type=discount_type,
                discount_value=discount_value,
                max_uses=max_uses,
                valid_from=valid_from or now,
                valid_until=valid_until,
                applicable_ticket_types=list(applicable_ticket_types or []),
                description=description,
                min_order_value=min_order_value,
                created_at=now,
            )
        except ValueError as e:
            raise TicketingError(TicketingErrorKind.VALIDATION, str(e)) from e

        self.promo_codes.append(promo)
        return promo

    # ------------------------------------------------------------------
    # Publication & details
    # ------------------------------------------------------------------

    def publish_errors(self) -> List[str]:
        errors = []
        if not self.event.banner_url:
            errors.append('Banner image is required')
        if not self.event.thumbnail_url:
            errors.append('Thumbnail image is required')
        if not self.ticket_types:
            errors.append('At least one ticket type is required')
        if self.event.geo_location is None:
            errors.append('Geolocation is required')
        errors.extend(self.event.date_errors())
        return errors

    @Logger.io
    def publish(self, *, by: str, now: datetime) -> None:
        errors = self.publish_errors()
        if errors:
            raise TicketingError(
                TicketingErrorKind.VALIDATION, 'Event is not ready to be published', errors=errors
            )
        self.event = attrs.evolve(
            self.event,
            status=EventStatus.PUBLISHED,
            is_published=True,
            published_at=now,
            updated_by=by,
            updated_at=now,
        )

    @Logger.io
    def unpublish(self, *, by: str, now: datetime) -> None:
        self.event = attrs.evolve(
            self.event,
            status=EventStatus.DRAFT,
            is_published=False,
            updated_by=by,
            updated_at=now,
        )

    @Logger.io
    def update_details(self, *, changes: Dict[str, Any], by: str, now: datetime) -> None:
        rejected = sorted(set(changes) - UPDATABLE_EVENT_FIELDS)
        if rejected:
            raise TicketingError(
                TicketingErrorKind.VALIDATION,
                'Only descriptive event fields can be updated',
                errors=[f'{field} cannot be updated' for field in rejected],
            )
        try:
            updated = attrs.evolve(self.event, **changes, updated_by=by, updated_at=now)
        except ValueError as e:
            raise TicketingError(TicketingErrorKind.VALIDATION, str(e)) from e

        date_errors = updated.date_errors()
        if date_errors:
            raise TicketingError(TicketingErrorKind.VALIDATION, 'Invalid event dates', errors=date_errors)
        self.event = updated

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def check_invariants(self) -> None:
        for ticket in self.ticket_types:
            ticket.check_invariants()

        for promo in self.promo_codes:
            if promo.is_used != (promo.used_count >= promo.max_uses):
                raise TicketingError(
                    TicketingErrorKind.INVENTORY_INCONSISTENT,
                    f'Promo code {promo.code} usage flag disagrees with its counter',
                )

        seats = [hold.seat_number for hold in self.admin_holds]
        if len(seats) != len(set(seats)) or set(seats) & set(self.pending_seats):
            raise TicketingError(
                TicketingErrorKind.INVENTORY_INCONSISTENT,
                f'Event {self.event_id} has a seat held more than once',
            )
