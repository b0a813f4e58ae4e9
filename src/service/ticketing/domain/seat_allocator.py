"""
Seat Allocator
Pure zone-bounded first-fit over the event's seating grid - no I/O.

Order is total and deterministic: lowest row first, then lowest seat within
the row. A seat is unavailable when it appears in an admin hold
(administrative or booked) or is held by an active reservation. Two callers
asking the same question of the same event state receive the same leading
prefix.
"""

from typing import Iterable, List, Set

from src.service.ticketing.domain.entity.admin_hold_entity import AdminHold
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.seating_config import SeatingConfig


def unavailable_seats(
    *, admin_holds: Iterable[AdminHold], pending_seats: Iterable[str] = ()
) -> Set[str]:
    return {hold.seat_number for hold in admin_holds} | set(pending_seats)


def allocate_seats(
    *,
    seating_config: SeatingConfig,
    admin_holds: Iterable[AdminHold],
    zone: SeatZone,
    quantity: int,
    pending_seats: Iterable[str] = (),
) -> List[str]:
    """Return up to `quantity` free seat identifiers in `zone` (shorter when the zone is exhausted)."""
    if quantity <= 0:
        return []

    unavailable = unavailable_seats(admin_holds=admin_holds, pending_seats=pending_seats)
    seats: List[str] = []
    for _row, _seat, seat_id in seating_config.iter_seats(zone):
        if seat_id in unavailable:
            continue
        seats.append(seat_id)
        if len(seats) == quantity:
            break
    return seats


def free_seat_count(
    *,
    seating_config: SeatingConfig,
    admin_holds: Iterable[AdminHold],
    zone: SeatZone,
    pending_seats: Iterable[str] = (),
) -> int:
    unavailable = unavailable_seats(admin_holds=admin_holds, pending_seats=pending_seats)
    return sum(
        1 for _row, _seat, seat_id in seating_config.iter_seats(zone) if seat_id not in unavailable
    )
