"""
Seating configuration - value object

A hall of R rows x S seats. Rows are labelled A, B, ... (so R <= 26) and seat
identifiers read `<RowLetter>-<SeatNumber>`, e.g. `C-4`.

Three optional zones (front, middle, back) partition the rows as inclusive
ranges; rows outside any zone are "general". A range whose start is after its
end is an empty zone.
"""

from typing import Iterator

import attrs

from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


MAX_ROWS = 26


def row_letter(row: int) -> str:
    return chr(ord('A') + row - 1)


def format_seat_id(row: int, seat: int) -> str:
    return f'{row_letter(row)}-{seat}'


def parse_seat_id(seat_id: str) -> tuple[int, int]:
    """'C-4' -> (3, 4). Raises TicketingError(validation) on malformed input."""
    letter, sep, number = seat_id.strip().upper().partition('-')
    if not sep or len(letter) != 1 or not letter.isalpha() or not number.isdigit():
        raise TicketingError(
            TicketingErrorKind.VALIDATION,
            f'Invalid seat identifier "{seat_id}", expected <RowLetter>-<SeatNumber>',
        )
    return ord(letter) - ord('A') + 1, int(number)


def canonical_seat_id(seat_id: str) -> str:
    """'a-01' -> 'A-1', the form the allocator hands out."""
    return format_seat_id(*parse_seat_id(seat_id))


@attrs.frozen
class RowRange:
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __contains__(self, row: object) -> bool:
        return isinstance(row, int) and self.start <= row <= self.end

    def overlaps(self, other: 'RowRange') -> bool:
        if self.is_empty or other.is_empty:
            return False
        return self.start <= other.end and other.start <= self.end


@attrs.frozen
class SeatingConfig:
    total_rows: int = 5
    seats_per_row: int = 6
    front_rows: RowRange = RowRange(1, 2)
    middle_rows: RowRange = RowRange(3, 3)
    back_rows: RowRange = RowRange(4, 5)

    def __attrs_post_init__(self) -> None:
        errors = self.validation_errors()
        if errors:
            raise TicketingError(
                TicketingErrorKind.VALIDATION, 'Invalid seating configuration', errors=errors
            )

    def validation_errors(self) -> list[str]:
        errors: list[str] = []
        if not 1 <= self.total_rows <= MAX_ROWS:
            errors.append(f'totalRows must be between 1 and {MAX_ROWS}')
        if self.seats_per_row < 1:
            errors.append('seatsPerRow must be at least 1')

        zones = self.zone_ranges()
        for zone, rows in zones.items():
            if rows.is_empty:
                continue
            if rows.start < 1 or rows.end > self.total_rows:
                errors.append(f'{zone} zone rows must lie within 1..{self.total_rows}')

        ordered = list(zones.items())
        for i, (zone_a, rows_a) in enumerate(ordered):
            for zone_b, rows_b in ordered[i + 1 :]:
                if rows_a.overlaps(rows_b):
                    errors.append(f'{zone_a} and {zone_b} zones overlap')
        return errors

    def zone_ranges(self) -> dict[SeatZone, RowRange]:
        return {
            SeatZone.FRONT: self.front_rows,
            SeatZone.MIDDLE: self.middle_rows,
            SeatZone.BACK: self.back_rows,
        }

    def rows_for(self, zone: SeatZone) -> RowRange:
        if zone == SeatZone.GENERAL:
            return RowRange(1, self.total_rows)
        return self.zone_ranges()[zone]

    def zone_of_row(self, row: int) -> SeatZone:
        for zone, rows in self.zone_ranges().items():
            if row in rows:
                return zone
        return SeatZone.GENERAL

    def seat_count(self, zone: SeatZone = SeatZone.GENERAL) -> int:
        rows = self.rows_for(zone)
        return 0 if rows.is_empty else (rows.end - rows.start + 1) * self.seats_per_row

    def contains_seat(self, seat_id: str) -> bool:
        row, seat = parse_seat_id(seat_id)
        return 1 <= row <= self.total_rows and 1 <= seat <= self.seats_per_row

    def iter_seats(self, zone: SeatZone = SeatZone.GENERAL) -> Iterator[tuple[int, int, str]]:
        """Rows low → high, seats low → high within a row."""
        rows = self.rows_for(zone)
        for row in range(rows.start, rows.end + 1):
            for seat in range(1, self.seats_per_row + 1):
                yield row, seat, format_seat_id(row, seat)
