"""
Unit tests for EventTicketingAggregate

Covers the reservation lifecycle inside one event document (reserve, confirm,
release, cancel), administration (holds, promo codes, publication) and the
invariants checked after every mutation.
"""

from datetime import timedelta
import re

import pytest

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    CODE_TICKET_NAME,
    PAID_TICKET_NAME,
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum.booking_status import PaymentMethod, PaymentStatus
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.promo_code_state import PromoCodeState
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from src.service.ticketing.domain.value_object.seating_config import SeatingConfig
from test.service.ticketing.unit.helpers import (
    RESERVATION_TTL,
    build_aggregate,
    build_event,
    buyer_info,
    scripted_codes,
)
from test.util_constant import TEST_NOW


def _reserve(
    aggregate: EventTicketingAggregate,
    ticket_type: str = PAID_TICKET_NAME,
    quantity: int = 1,
    promo_code=None,
    reservation_id: str = 'RES-1',
) -> Reservation:
    return aggregate.reserve(
        reservation_id=reservation_id,
        ticket_type_name=ticket_type,
        quantity=quantity,
        promo_code=promo_code,
        user_info=buyer_info(),
        now=TEST_NOW,
        ttl=RESERVATION_TTL,
    )


def _confirm(aggregate: EventTicketingAggregate, reservation: Reservation, booking_id='BOOK-1'):
    discount_type = aggregate.confirm_reservation(
        reservation=reservation, booking_id=booking_id, now=TEST_NOW
    )
    return Booking.create_from_reservation(
        booking_id=booking_id,
        reservation=reservation,
        payment_method=PaymentMethod.UPI,
        payment_status=PaymentStatus.COMPLETED,
        payment_id='pay_1',
        promo_discount_type=discount_type,
        booking_source='website',
        now=TEST_NOW,
    )


def _counters(aggregate: EventTicketingAggregate, name: str) -> tuple[int, int, int]:
    ticket = aggregate.find_ticket_type(name)
    return ticket.sold_quantity, ticket.reserved_quantity, ticket.available_quantity


@pytest.mark.unit
class TestCreateEventWithTickets:
    def test_default_ticket_types_and_code_pool(self) -> None:
        aggregate = build_aggregate()

        paid = aggregate.find_ticket_type(PAID_TICKET_NAME)
        code = aggregate.find_ticket_type(CODE_TICKET_NAME)
        assert (paid.total_quantity, paid.price, paid.requires_promo_code) == (15, 100, False)
        assert (code.total_quantity, code.price, code.requires_promo_code) == (15, 0, True)
        assert len(aggregate.promo_codes) == 15
        assert len({promo.code for promo in aggregate.promo_codes}) == 15

    def test_generated_codes_are_free_single_use_for_thirty_days(self) -> None:
        aggregate = EventTicketingAggregate.create_event_with_tickets(
            event=build_event(), seating_config=SeatingConfig(), now=TEST_NOW, code_ticket_count=3
        )

        for promo in aggregate.promo_codes:
            assert re.fullmatch(r'[A-Z0-9]{3}-[A-Z0-9]{3}-[A-Z0-9]{2}', promo.code)
            assert promo.discount_type == DiscountType.FREE
            assert promo.max_uses == 1
            assert promo.valid_until == TEST_NOW + timedelta(days=30)
            assert promo.applicable_ticket_types == [CODE_TICKET_NAME]

    def test_duplicate_candidates_are_retried(self) -> None:
        aggregate = EventTicketingAggregate.create_event_with_tickets(
            event=build_event(),
            seating_config=SeatingConfig(),
            now=TEST_NOW,
            code_ticket_count=2,
            code_source=scripted_codes(['AAA-AAA-AA', 'AAA-AAA-AA', 'BBB-BBB-BB']),
        )
        assert [promo.code for promo in aggregate.promo_codes] == ['AAA-AAA-AA', 'BBB-BBB-BB']

    def test_code_generation_gives_up_after_bounded_attempts(self) -> None:
        with pytest.raises(TicketingError) as exc_info:
            EventTicketingAggregate.create_event_with_tickets(
                event=build_event(),
                seating_config=SeatingConfig(),
                now=TEST_NOW,
                code_ticket_count=2,
                promo_code_max_attempts=5,
                code_source=lambda: 'SAME-CODE',
            )
        assert exc_info.value.kind == TicketingErrorKind.INTERNAL_ERROR

    def test_end_before_start_is_rejected(self) -> None:
        event = build_event(end_date=TEST_NOW, start_date=TEST_NOW + timedelta(days=1))
        with pytest.raises(TicketingError) as exc_info:
            build_aggregate(event=event)
        assert exc_info.value.kind == TicketingErrorKind.VALIDATION


@pytest.mark.unit
class TestReserve:
    def test_reserve_holds_seats_and_inventory(self) -> None:
        aggregate = build_aggregate()

        reservation = _reserve(aggregate, quantity=2)

        assert reservation.seats == ['A-1', 'A-2']
        assert reservation.expires_at == TEST_NOW + timedelta(minutes=15)
        assert reservation.subtotal == 200
        assert reservation.final_amount == 200
        assert _counters(aggregate, PAID_TICKET_NAME) == (0, 2, 13)
        assert aggregate.pending_seats == {'A-1': 'RES-1', 'A-2': 'RES-1'}

    def test_next_reservation_skips_pending_seats(self) -> None:
        aggregate = build_aggregate()
        _reserve(aggregate, quantity=2)

        second = _reserve(aggregate, reservation_id='RES-2')

        assert second.seats == ['A-3']

    def test_reserve_with_code_binds_it(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.promo_codes[0]

        reservation = _reserve(aggregate, CODE_TICKET_NAME, promo_code=promo.code)

        assert reservation.discount == reservation.subtotal
        assert reservation.final_amount == 0
        assert promo.state == PromoCodeState.BOUND
        assert promo.is_used is True
        assert promo.used_count == 1
        assert promo.seat_number == 'D-1'
        assert promo.used_by == buyer_info()

    def test_failed_reserve_changes_nothing(self) -> None:
        aggregate = build_aggregate(paid_ticket_count=1)
        _reserve(aggregate)

        with pytest.raises(TicketingError) as exc_info:
            _reserve(aggregate, reservation_id='RES-2')

        assert exc_info.value.kind == TicketingErrorKind.INSUFFICIENT_INVENTORY
        assert _counters(aggregate, PAID_TICKET_NAME) == (0, 1, 0)
        assert list(aggregate.pending_seats) == ['A-1']


@pytest.mark.unit
class TestConfirmAndCancel:
    def test_confirm_sells_seats_and_records_occupied_holds(self) -> None:
        aggregate = build_aggregate()
        reservation = _reserve(aggregate, quantity=2)

        booking = _confirm(aggregate, reservation)

        assert _counters(aggregate, PAID_TICKET_NAME) == (2, 0, 13)
        assert aggregate.pending_seats == {}
        holds = {hold.seat_number: hold for hold in aggregate.admin_holds}
        assert set(holds) == {'A-1', 'A-2'}
        assert all(hold.is_occupied and hold.reserved_by == 'system' for hold in holds.values())
        assert all(hold.booking_id == 'BOOK-1' for hold in holds.values())
        assert aggregate.analytics.total_bookings == 1
        assert aggregate.analytics.total_revenue == 200
        assert booking.seat_numbers == ['A-1', 'A-2']

    def test_confirm_redeems_the_code(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.promo_codes[0]
        reservation = _reserve(aggregate, CODE_TICKET_NAME, promo_code=promo.code)

        booking = _confirm(aggregate, reservation)

        assert promo.state == PromoCodeState.REDEEMED
        assert booking.promo_code.code == promo.code
        assert booking.promo_code.discount_type == DiscountType.FREE
        assert aggregate.find_hold('D-1').promo_code_used == promo.code

    def test_confirm_after_release_reports_expired(self) -> None:
        aggregate = build_aggregate()
        reservation = _reserve(aggregate)
        aggregate.release_reservation(reservation=reservation)

        with pytest.raises(TicketingError) as exc_info:
            _confirm(aggregate, reservation)

        assert exc_info.value.kind == TicketingErrorKind.RESERVATION_EXPIRED

    def test_confirm_with_unbound_code_is_invalidated(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.promo_codes[0]
        reservation = _reserve(aggregate, CODE_TICKET_NAME, promo_code=promo.code)
        promo.unbind(reservation_id=reservation.reservation_id)

        with pytest.raises(TicketingError) as exc_info:
            _confirm(aggregate, reservation)

        assert exc_info.value.kind == TicketingErrorKind.PROMO_INVALIDATED

    def test_reserve_confirm_cancel_restores_inventory(self) -> None:
        aggregate = build_aggregate()
        before = _counters(aggregate, PAID_TICKET_NAME)
        booking = _confirm(aggregate, _reserve(aggregate, quantity=3))

        aggregate.cancel_booking(booking=booking)

        assert _counters(aggregate, PAID_TICKET_NAME) == before
        assert aggregate.admin_holds == []
        assert aggregate.analytics.total_bookings == 0
        assert aggregate.analytics.total_revenue == 0

    def test_cancel_keeps_the_code_redeemed(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.promo_codes[0]
        booking = _confirm(aggregate, _reserve(aggregate, CODE_TICKET_NAME, promo_code=promo.code))

        aggregate.cancel_booking(booking=booking)

        assert promo.state == PromoCodeState.REDEEMED
        assert promo.is_used is True


@pytest.mark.unit
class TestReleaseReservation:
    def test_release_returns_inventory_seats_and_code(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.promo_codes[0]
        reservation = _reserve(aggregate, CODE_TICKET_NAME, promo_code=promo.code)

        released = aggregate.release_reservation(reservation=reservation)

        assert released is True
        assert _counters(aggregate, CODE_TICKET_NAME) == (0, 0, 15)
        assert aggregate.pending_seats == {}
        assert promo.state == PromoCodeState.UNUSED
        assert (promo.is_used, promo.used_count, promo.used_by, promo.seat_number) == (
            False,
            0,
            None,
            None,
        )

    def test_release_is_idempotent(self) -> None:
        aggregate = build_aggregate()
        reservation = _reserve(aggregate, quantity=2)
        aggregate.release_reservation(reservation=reservation)

        assert aggregate.release_reservation(reservation=reservation) is False
        assert _counters(aggregate, PAID_TICKET_NAME) == (0, 0, 15)


@pytest.mark.unit
class TestAdministration:
    def test_admin_hold_blocks_the_allocator(self) -> None:
        aggregate = build_aggregate()
        aggregate.add_admin_hold(
            seat_number='a-1',
            ticket_type_name=PAID_TICKET_NAME,
            reserved_for=buyer_info('Guest Speaker', user_id=None),
            reserved_by='organizer-1',
            now=TEST_NOW,
        )

        reservation = _reserve(aggregate)

        assert reservation.seats == ['A-2']
        # Holds do not draw from ticket inventory
        assert _counters(aggregate, PAID_TICKET_NAME) == (0, 1, 14)

    def test_second_hold_on_a_seat_is_rejected(self) -> None:
        aggregate = build_aggregate()
        kwargs = {
            'seat_number': 'A-1',
            'ticket_type_name': PAID_TICKET_NAME,
            'reserved_for': buyer_info(),
            'reserved_by': 'organizer-1',
            'now': TEST_NOW,
        }
        aggregate.add_admin_hold(**kwargs)

        with pytest.raises(TicketingError) as exc_info:
            aggregate.add_admin_hold(**kwargs)

        assert exc_info.value.kind == TicketingErrorKind.SEAT_TAKEN

    def test_zero_padded_seat_is_the_same_seat(self) -> None:
        aggregate = build_aggregate()
        hold = aggregate.add_admin_hold(
            seat_number='A-01',
            ticket_type_name=PAID_TICKET_NAME,
            reserved_for=buyer_info('Guest Speaker', user_id=None),
            reserved_by='organizer-1',
            now=TEST_NOW,
        )
        assert hold.seat_number == 'A-1'

        with pytest.raises(TicketingError) as exc_info:
            aggregate.add_admin_hold(
                seat_number='A-1',
                ticket_type_name=PAID_TICKET_NAME,
                reserved_for=buyer_info(),
                reserved_by='organizer-1',
                now=TEST_NOW,
            )

        assert exc_info.value.kind == TicketingErrorKind.SEAT_TAKEN
        assert [h.seat_number for h in aggregate.admin_holds] == ['A-1']
        assert _reserve(aggregate).seats == ['A-2']

    def test_hold_on_a_pending_seat_is_rejected(self) -> None:
        aggregate = build_aggregate()
        _reserve(aggregate)

        with pytest.raises(TicketingError) as exc_info:
            aggregate.add_admin_hold(
                seat_number='A-1',
                ticket_type_name=PAID_TICKET_NAME,
                reserved_for=buyer_info(),
                reserved_by='organizer-1',
                now=TEST_NOW,
            )

        assert exc_info.value.kind == TicketingErrorKind.SEAT_TAKEN

    def test_hold_outside_the_hall_is_rejected(self) -> None:
        with pytest.raises(TicketingError) as exc_info:
            build_aggregate().add_admin_hold(
                seat_number='Z-1',
                ticket_type_name=PAID_TICKET_NAME,
                reserved_for=buyer_info(),
                reserved_by='organizer-1',
                now=TEST_NOW,
            )
        assert exc_info.value.kind == TicketingErrorKind.VALIDATION

    def test_promo_codes_are_normalized_and_unique(self) -> None:
        aggregate = build_aggregate()
        promo = aggregate.add_promo_code(code=' vip-guest ', now=TEST_NOW)

        assert promo.code == 'VIP-GUEST'
        assert promo.valid_from == TEST_NOW
        with pytest.raises(TicketingError) as exc_info:
            aggregate.add_promo_code(code='VIP-GUEST', now=TEST_NOW)
        assert exc_info.value.kind == TicketingErrorKind.VALIDATION

    def test_promo_code_for_unknown_ticket_type(self) -> None:
        with pytest.raises(TicketingError) as exc_info:
            build_aggregate().add_promo_code(
                code='VIP-GUEST', now=TEST_NOW, applicable_ticket_types=['Balcony']
            )
        assert exc_info.value.kind == TicketingErrorKind.UNKNOWN_TICKET_TYPE

    def test_publish_requires_images_and_geo(self) -> None:
        aggregate = build_aggregate(event=build_event(banner_url=None, geo_location=None))

        with pytest.raises(TicketingError) as exc_info:
            aggregate.publish(by='organizer-1', now=TEST_NOW)

        assert exc_info.value.errors == ['Banner image is required', 'Geolocation is required']

    def test_publish_and_unpublish(self) -> None:
        aggregate = build_aggregate()

        aggregate.publish(by='organizer-1', now=TEST_NOW)
        assert aggregate.event.is_published is True
        assert aggregate.event.status == EventStatus.PUBLISHED
        assert aggregate.event.published_at == TEST_NOW

        aggregate.unpublish(by='organizer-1', now=TEST_NOW)
        assert aggregate.event.is_published is False
        assert aggregate.event.status == EventStatus.DRAFT

    def test_update_details_rejects_inventory_fields(self) -> None:
        aggregate = build_aggregate()

        with pytest.raises(TicketingError) as exc_info:
            aggregate.update_details(
                changes={'title': 'Late Jazz', 'created_by': 'someone'}, by='admin-1', now=TEST_NOW
            )

        assert exc_info.value.errors == ['created_by cannot be updated']
        assert aggregate.event.title == 'Jazz Night'

    def test_update_details(self) -> None:
        aggregate = build_aggregate()

        aggregate.update_details(changes={'title': 'Late Jazz'}, by='admin-1', now=TEST_NOW)

        assert aggregate.event.title == 'Late Jazz'
        assert aggregate.event.updated_by == 'admin-1'


@pytest.mark.unit
class TestInvariants:
    def test_counters_out_of_range_are_inconsistent(self) -> None:
        aggregate = build_aggregate()
        aggregate.find_ticket_type(PAID_TICKET_NAME).sold_quantity = 16

        with pytest.raises(TicketingError) as exc_info:
            aggregate.check_invariants()

        assert exc_info.value.kind == TicketingErrorKind.INVENTORY_INCONSISTENT
        assert exc_info.value.status_code == 500

    def test_promo_flag_must_follow_counter(self) -> None:
        aggregate = build_aggregate()
        aggregate.promo_codes[0].is_used = True

        with pytest.raises(TicketingError):
            aggregate.check_invariants()

    def test_sold_out_when_every_ticket_type_is_gone(self) -> None:
        aggregate = build_aggregate(paid_ticket_count=1, code_ticket_count=0)
        assert aggregate.is_sold_out is False

        _reserve(aggregate)

        assert aggregate.is_sold_out is True
