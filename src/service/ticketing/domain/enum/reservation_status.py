from enum import StrEnum


class ReservationStatus(StrEnum):
    """Persisted reservation states; an expired reservation is deleted by the reaper."""

    ACTIVE = 'active'
    CONSUMED = 'consumed'
