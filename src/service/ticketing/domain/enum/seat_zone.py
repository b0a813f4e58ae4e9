from enum import StrEnum


class SeatZone(StrEnum):
    """Row band a ticket type draws its seats from; general spans every row."""

    FRONT = 'front'
    MIDDLE = 'middle'
    BACK = 'back'
    GENERAL = 'general'
