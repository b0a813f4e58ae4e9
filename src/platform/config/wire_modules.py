"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    add_admin_hold_use_case,
    add_promo_code_use_case,
    cancel_booking_use_case,
    confirm_booking_use_case,
    create_event_and_tickets_use_case,
    delete_event_use_case,
    publish_event_use_case,
    reap_expired_reservations_use_case,
    release_reservation_use_case,
    reserve_tickets_use_case,
    update_booking_attendance_use_case,
    update_event_use_case,
)
from src.service.ticketing.app.query import (
    check_availability_use_case,
    get_booking_use_case,
    get_event_analytics_use_case,
    get_event_use_case,
    get_seat_map_use_case,
    list_available_promo_codes_use_case,
    list_events_use_case,
)
from src.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    # Commands
    create_event_and_tickets_use_case,
    update_event_use_case,
    delete_event_use_case,
    publish_event_use_case,
    reserve_tickets_use_case,
    confirm_booking_use_case,
    release_reservation_use_case,
    reap_expired_reservations_use_case,
    add_admin_hold_use_case,
    add_promo_code_use_case,
    cancel_booking_use_case,
    update_booking_attendance_use_case,
    # Queries
    get_event_use_case,
    list_events_use_case,
    check_availability_use_case,
    get_seat_map_use_case,
    list_available_promo_codes_use_case,
    get_event_analytics_use_case,
    get_booking_use_case,
    # Auth
    role_auth,
]
