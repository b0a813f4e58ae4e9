from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.value_object.user_info import UserInfo


SYSTEM_RESERVER = 'system'


@attrs.define
class AdminHold:
    """
    A seat pinned outside the open allocator pool.

    Created administratively (is_occupied=False) or by booking confirmation
    (is_occupied=True, reserved_by="system", booking_id set). A seat
    identifier appears at most once across an event's holds.
    """

    seat_number: str
    ticket_type: str
    reserved_for: UserInfo = attrs.field(factory=UserInfo)
    is_occupied: bool = False
    promo_code_used: Optional[str] = None
    reserved_by: str = SYSTEM_RESERVER
    booking_id: Optional[str] = None
    notes: str = ''
    reserved_at: Optional[datetime] = None
