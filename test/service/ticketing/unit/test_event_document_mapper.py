"""Aggregate <-> JSON document mapping survives a trip through orjson (as stored in JSONB)."""

import orjson
import pytest

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    CODE_TICKET_NAME,
    PAID_TICKET_NAME,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import PaymentMethod, PaymentStatus
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.driven_adapter.repo.event_document_mapper import (
    booking_from_document,
    booking_to_document,
    event_aggregate_from_document,
    event_aggregate_to_document,
    event_columns,
    reservation_from_document,
    reservation_to_document,
)
from test.service.ticketing.unit.helpers import RESERVATION_TTL, build_aggregate, buyer_info
from test.util_constant import TEST_NOW


def _through_json(document):
    return orjson.loads(orjson.dumps(document))


@pytest.mark.unit
class TestEventDocumentMapper:
    def test_event_aggregate_with_live_state(self) -> None:
        aggregate = build_aggregate()
        aggregate.reserve(
            reservation_id='RES-1',
            ticket_type_name=CODE_TICKET_NAME,
            quantity=1,
            promo_code=aggregate.promo_codes[0].code,
            user_info=buyer_info(),
            now=TEST_NOW,
            ttl=RESERVATION_TTL,
        )
        aggregate.add_admin_hold(
            seat_number='A-1',
            ticket_type_name=PAID_TICKET_NAME,
            reserved_for=buyer_info('Guest Speaker', user_id=None),
            reserved_by='organizer-1',
            now=TEST_NOW,
            notes='Front row for the speaker',
        )
        aggregate.version = 7
        aggregate.analytics.total_views = 3

        restored = event_aggregate_from_document(
            _through_json(event_aggregate_to_document(aggregate)), version=7, total_views=3
        )

        assert restored == aggregate

    def test_version_is_not_part_of_the_document(self) -> None:
        document = event_aggregate_to_document(build_aggregate())
        assert 'version' not in document

    def test_listing_columns(self) -> None:
        columns = event_columns(build_aggregate(paid_ticket_price=250))

        assert (columns['min_price'], columns['max_price']) == (0, 250)
        assert columns['city'] == 'Mumbai'
        assert columns['status'] == 'draft'
        assert columns['latitude'] == 19.076

    def test_reservation_and_booking(self) -> None:
        aggregate = build_aggregate()
        code = aggregate.promo_codes[0].code
        reservation = aggregate.reserve(
            reservation_id='RES-1',
            ticket_type_name=CODE_TICKET_NAME,
            quantity=1,
            promo_code=code,
            user_info=buyer_info(),
            now=TEST_NOW,
            ttl=RESERVATION_TTL,
        )
        booking = Booking.create_from_reservation(
            booking_id='BOOK-1',
            reservation=reservation,
            payment_method=PaymentMethod.FREE,
            payment_status=PaymentStatus.COMPLETED,
            payment_id=None,
            promo_discount_type=DiscountType.FREE,
            booking_source='website',
            now=TEST_NOW,
        )

        assert reservation_from_document(_through_json(reservation_to_document(reservation))) == (
            reservation
        )
        restored = booking_from_document(_through_json(booking_to_document(booking)))
        assert restored == booking
        assert restored.promo_code.code == code
