"""Application layer DTOs"""

from src.service.ticketing.app.dto.event_list_filter import EventListFilter, EventSortField
from src.service.ticketing.app.dto.ticketing_result_dto import (
    ConfirmBookingResult,
    CreateEventResult,
    ReapSweepResult,
)

__all__ = [
    'ConfirmBookingResult',
    'CreateEventResult',
    'EventListFilter',
    'EventSortField',
    'ReapSweepResult',
]
