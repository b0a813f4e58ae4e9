"""
Unit tests for the seating grid and the seat allocator

The allocator is a pure function of (seating config, admin holds, pending
seats, zone, quantity): lowest row first, then lowest seat in the row.
"""

import pytest

from src.service.ticketing.domain.entity.admin_hold_entity import AdminHold
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.seat_allocator import allocate_seats, free_seat_count
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from src.service.ticketing.domain.value_object.seating_config import (
    RowRange,
    SeatingConfig,
    format_seat_id,
    parse_seat_id,
)


def _hold(seat: str, *, occupied: bool = False) -> AdminHold:
    return AdminHold(seat_number=seat, ticket_type='Paid Ticket', is_occupied=occupied)


@pytest.mark.unit
class TestSeatingConfig:
    def test_seat_ids_round_trip_through_row_letters(self) -> None:
        assert format_seat_id(1, 1) == 'A-1'
        assert format_seat_id(3, 4) == 'C-4'
        assert parse_seat_id('c-4') == (3, 4)

    @pytest.mark.parametrize('seat_id', ['A1', 'AA-1', '1-1', 'A-', 'A-x'])
    def test_malformed_seat_id_is_a_validation_error(self, seat_id: str) -> None:
        with pytest.raises(TicketingError) as exc_info:
            parse_seat_id(seat_id)
        assert exc_info.value.kind == TicketingErrorKind.VALIDATION

    def test_default_layout_zones(self) -> None:
        config = SeatingConfig()

        assert config.zone_of_row(1) == SeatZone.FRONT
        assert config.zone_of_row(3) == SeatZone.MIDDLE
        assert config.zone_of_row(5) == SeatZone.BACK
        assert config.seat_count() == 30
        assert config.seat_count(SeatZone.BACK) == 12

    def test_rows_outside_every_zone_are_general(self) -> None:
        config = SeatingConfig(
            total_rows=6,
            front_rows=RowRange(1, 1),
            middle_rows=RowRange(2, 2),
            back_rows=RowRange(3, 3),
        )
        assert config.zone_of_row(6) == SeatZone.GENERAL

    def test_overlapping_zones_are_rejected(self) -> None:
        with pytest.raises(TicketingError) as exc_info:
            SeatingConfig(front_rows=RowRange(1, 3), middle_rows=RowRange(3, 3))

        assert exc_info.value.kind == TicketingErrorKind.VALIDATION
        assert any('overlap' in error for error in exc_info.value.errors or [])

    def test_zone_outside_the_hall_is_rejected(self) -> None:
        with pytest.raises(TicketingError):
            SeatingConfig(total_rows=4, back_rows=RowRange(4, 5))

    def test_contains_seat(self) -> None:
        config = SeatingConfig()
        assert config.contains_seat('E-6')
        assert not config.contains_seat('F-1')
        assert not config.contains_seat('A-7')


@pytest.mark.unit
class TestAllocateSeats:
    def test_fills_zone_row_by_row(self) -> None:
        seats = allocate_seats(
            seating_config=SeatingConfig(),
            admin_holds=[],
            zone=SeatZone.FRONT,
            quantity=8,
        )
        assert seats == ['A-1', 'A-2', 'A-3', 'A-4', 'A-5', 'A-6', 'B-1', 'B-2']

    def test_general_spans_the_whole_hall(self) -> None:
        seats = allocate_seats(
            seating_config=SeatingConfig(),
            admin_holds=[_hold('A-1')],
            zone=SeatZone.GENERAL,
            quantity=2,
        )
        assert seats == ['A-2', 'A-3']

    def test_skips_admin_holds_and_pending_seats(self) -> None:
        seats = allocate_seats(
            seating_config=SeatingConfig(),
            admin_holds=[_hold('D-1'), _hold('D-3', occupied=True)],
            zone=SeatZone.BACK,
            quantity=3,
            pending_seats=['D-2'],
        )
        assert seats == ['D-4', 'D-5', 'D-6']

    def test_exhausted_zone_returns_short_list(self) -> None:
        seats = allocate_seats(
            seating_config=SeatingConfig(),
            admin_holds=[],
            zone=SeatZone.MIDDLE,
            quantity=7,
        )
        assert len(seats) == 6

    def test_empty_zone_yields_nothing(self) -> None:
        config = SeatingConfig(middle_rows=RowRange(4, 3), back_rows=RowRange(4, 5))
        assert allocate_seats(
            seating_config=config, admin_holds=[], zone=SeatZone.MIDDLE, quantity=1
        ) == []

    def test_zero_quantity_yields_nothing(self) -> None:
        assert allocate_seats(
            seating_config=SeatingConfig(), admin_holds=[], zone=SeatZone.FRONT, quantity=0
        ) == []

    def test_same_state_gives_same_prefix(self) -> None:
        holds = [_hold('A-2'), _hold('A-4')]
        first = allocate_seats(
            seating_config=SeatingConfig(), admin_holds=holds, zone=SeatZone.FRONT, quantity=3
        )
        second = allocate_seats(
            seating_config=SeatingConfig(), admin_holds=holds, zone=SeatZone.FRONT, quantity=5
        )
        assert second[: len(first)] == first

    def test_free_seat_count(self) -> None:
        count = free_seat_count(
            seating_config=SeatingConfig(),
            admin_holds=[_hold('D-1')],
            zone=SeatZone.BACK,
            pending_seats=['E-6'],
        )
        assert count == 10
