"""
Aggregate <-> JSON document mapping

The event aggregate, reservations and bookings are persisted as JSONB
documents next to a few indexed columns. Datetimes are stored as ISO-8601
strings and enums as their values.
"""

from datetime import datetime
from typing import Any, Dict, Optional

import attrs

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventAnalytics,
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.admin_hold_entity import AdminHold
from src.service.ticketing.domain.entity.booking_entity import (
    Booking,
    BookingPromoCode,
    BookingTicket,
)
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.promo_code_entity import PromoCode
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.entity.ticket_type_entity import TicketType
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.reservation_status import ReservationStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.geo_location import GeoLocation
from src.service.ticketing.domain.value_object.seating_config import RowRange, SeatingConfig
from src.service.ticketing.domain.value_object.user_info import UserInfo


def _serialize_value(instance: Any, field: Any, value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_document(instance: Any) -> Dict[str, Any]:
    return attrs.asdict(instance, value_serializer=_serialize_value)


def _dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _user_info(data: Optional[Dict[str, Any]]) -> Optional[UserInfo]:
    return UserInfo(**data) if data is not None else None


# ----------------------------------------------------------------------
# Event aggregate
# ----------------------------------------------------------------------


def event_aggregate_to_document(aggregate: EventTicketingAggregate) -> Dict[str, Any]:
    """Everything but the version, which lives in its own column."""
    return {
        'event': to_document(aggregate.event),
        'seating_config': to_document(aggregate.seating_config),
        'ticket_types': [to_document(ticket) for ticket in aggregate.ticket_types],
        'promo_codes': [to_document(promo) for promo in aggregate.promo_codes],
        'admin_holds': [to_document(hold) for hold in aggregate.admin_holds],
        'pending_seats': dict(aggregate.pending_seats),
        'analytics': to_document(aggregate.analytics),
    }


def _event_from_document(data: Dict[str, Any]) -> Event:
    geo = data.get('geo_location')
    return Event(
        **{
            **data,
            'start_date': _dt(data['start_date']),
            'end_date': _dt(data['end_date']),
            'registration_deadline': _dt(data.get('registration_deadline')),
            'published_at': _dt(data.get('published_at')),
            'created_at': _dt(data.get('created_at')),
            'updated_at': _dt(data.get('updated_at')),
            'geo_location': GeoLocation(**geo) if geo else None,
        }
    )


def _seating_from_document(data: Dict[str, Any]) -> SeatingConfig:
    return SeatingConfig(
        total_rows=data['total_rows'],
        seats_per_row=data['seats_per_row'],
        front_rows=RowRange(**data['front_rows']),
        middle_rows=RowRange(**data['middle_rows']),
        back_rows=RowRange(**data['back_rows']),
    )


def _ticket_type_from_document(data: Dict[str, Any]) -> TicketType:
    return TicketType(
        **{
            **data,
            'sale_start': _dt(data.get('sale_start')),
            'sale_end': _dt(data.get('sale_end')),
        }
    )


def _promo_from_document(data: Dict[str, Any]) -> PromoCode:
    return PromoCode(
        **{
            **data,
            'valid_from': _dt(data.get('valid_from')),
            'valid_until': _dt(data.get('valid_until')),
            'used_at': _dt(data.get('used_at')),
            'created_at': _dt(data.get('created_at')),
            'used_by': _user_info(data.get('used_by')),
        }
    )


def _hold_from_document(data: Dict[str, Any]) -> AdminHold:
    return AdminHold(
        **{
            **data,
            'reserved_for': _user_info(data.get('reserved_for')) or UserInfo(),
            'reserved_at': _dt(data.get('reserved_at')),
        }
    )


def event_aggregate_from_document(
    document: Dict[str, Any], *, version: int, total_views: int = 0
) -> EventTicketingAggregate:
    analytics = EventAnalytics(**document.get('analytics', {}))
    # Views are counted in a dedicated column so reads never bump the version
    analytics.total_views = total_views
    return EventTicketingAggregate(
        event=_event_from_document(document['event']),
        seating_config=_seating_from_document(document['seating_config']),
        ticket_types=[_ticket_type_from_document(t) for t in document.get('ticket_types', [])],
        promo_codes=[_promo_from_document(p) for p in document.get('promo_codes', [])],
        admin_holds=[_hold_from_document(h) for h in document.get('admin_holds', [])],
        pending_seats=dict(document.get('pending_seats', {})),
        analytics=analytics,
        version=version,
    )


# ----------------------------------------------------------------------
# Reservation
# ----------------------------------------------------------------------


def reservation_to_document(reservation: Reservation) -> Dict[str, Any]:
    return to_document(reservation)


def reservation_from_document(data: Dict[str, Any]) -> Reservation:
    return Reservation(
        **{
            **data,
            'zone': SeatZone(data['zone']),
            'user_info': _user_info(data['user_info']),
            'created_at': _dt(data['created_at']),
            'expires_at': _dt(data['expires_at']),
            'status': ReservationStatus(data['status']),
        }
    )


# ----------------------------------------------------------------------
# Booking
# ----------------------------------------------------------------------


def booking_to_document(booking: Booking) -> Dict[str, Any]:
    return to_document(booking)


def booking_from_document(data: Dict[str, Any]) -> Booking:
    promo = data.get('promo_code')
    return Booking(
        **{
            **data,
            'user_info': _user_info(data['user_info']),
            'tickets': [
                BookingTicket(**{**ticket, 'zone': SeatZone(ticket['zone'])})
                for ticket in data['tickets']
            ],
            'promo_code': (
                BookingPromoCode(**{**promo, 'discount_type': DiscountType(promo['discount_type'])})
                if promo
                else None
            ),
            'payment_method': PaymentMethod(data['payment_method']),
            'payment_status': PaymentStatus(data['payment_status']),
            'booking_status': BookingStatus(data['booking_status']),
            'payment_date': _dt(data.get('payment_date')),
            'check_in_time': _dt(data.get('check_in_time')),
            'cancelled_at': _dt(data.get('cancelled_at')),
            'created_at': _dt(data.get('created_at')),
            'updated_at': _dt(data.get('updated_at')),
        }
    )


def event_columns(aggregate: EventTicketingAggregate) -> Dict[str, Any]:
    """Denormalized listing columns of the event row."""
    event = aggregate.event
    min_price, max_price = aggregate.price_range()
    geo = event.geo_location
    return {
        'title': event.title,
        'description': event.description,
        'venue_name': event.venue_name,
        'city': event.city,
        'state': event.state,
        'country': event.country,
        'category': event.category,
        'event_type': event.event_type,
        'mode': event.mode,
        'status': str(event.status),
        'is_published': event.is_published,
        'created_by': event.created_by,
        'start_date': event.start_date,
        'created_at': event.created_at,
        'min_price': min_price,
        'max_price': max_price,
        'longitude': geo.longitude if geo else None,
        'latitude': geo.latitude if geo else None,
        'document': event_aggregate_to_document(aggregate),
    }
