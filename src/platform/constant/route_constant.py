"""HTTP route paths shared by the app factory and the tests."""

API_PREFIX = '/api'

# Events
EVENT_BASE = f'{API_PREFIX}/events'
EVENT_DETAIL = f'{EVENT_BASE}/{{event_id}}'
EVENT_PUBLISH = f'{EVENT_DETAIL}/publish'
EVENT_UNPUBLISH = f'{EVENT_DETAIL}/unpublish'
EVENT_CHECK_AVAILABILITY = f'{EVENT_DETAIL}/check-availability'
EVENT_RESERVE = f'{EVENT_DETAIL}/reserve'
EVENT_RELEASE_RESERVATION = f'{EVENT_DETAIL}/reservations/{{reservation_id}}/release'
EVENT_CONFIRM_BOOKING = f'{EVENT_DETAIL}/confirm-booking'
EVENT_ADMIN_RESERVATIONS = f'{EVENT_DETAIL}/admin-reservations'
EVENT_SEAT_MAP = f'{EVENT_DETAIL}/seat-map'
EVENT_PROMO_CODES = f'{EVENT_DETAIL}/promo-codes'
EVENT_AVAILABLE_PROMO_CODES = f'{EVENT_DETAIL}/available-promo-codes'
EVENT_ANALYTICS = f'{EVENT_DETAIL}/analytics'

# Bookings
BOOKING_BASE = f'{API_PREFIX}/bookings'
BOOKING_DETAIL = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_DETAIL}/cancel'
BOOKING_CHECK_IN = f'{BOOKING_DETAIL}/check-in'
BOOKING_NO_SHOW = f'{BOOKING_DETAIL}/no-show'
