"""
Unit tests for the read models projected from the event aggregate
(seat map, promo code inventory, analytics) and for the event list filter.
"""

from datetime import timedelta

import pytest

from src.service.ticketing.app.dto.event_list_filter import EventListFilter, EventSortField
from src.service.ticketing.app.dto.event_projection_dto import (
    EventAnalyticsReport,
    PromoCodeInventory,
    SeatMapView,
)
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    CODE_TICKET_NAME,
    PAID_TICKET_NAME,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import PaymentMethod, PaymentStatus
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.geo_location import GeoLocation
from test.service.ticketing.unit.helpers import (
    RESERVATION_TTL,
    build_aggregate,
    build_event,
    buyer_info,
)
from test.util_constant import TEST_NOW


def _sold_aggregate():
    """Two paid seats sold, one code seat pending, one admin hold."""
    aggregate = build_aggregate(paid_ticket_price=100)
    paid = aggregate.reserve(
        reservation_id='RES-1',
        ticket_type_name=PAID_TICKET_NAME,
        quantity=2,
        promo_code=None,
        user_info=buyer_info(),
        now=TEST_NOW,
        ttl=RESERVATION_TTL,
    )
    discount_type = aggregate.confirm_reservation(
        reservation=paid, booking_id='BOOK-1', now=TEST_NOW
    )
    booking = Booking.create_from_reservation(
        booking_id='BOOK-1',
        reservation=paid,
        payment_method=PaymentMethod.CARD,
        payment_status=PaymentStatus.COMPLETED,
        payment_id='pay_1',
        promo_discount_type=discount_type,
        booking_source='website',
        now=TEST_NOW,
    )
    aggregate.reserve(
        reservation_id='RES-2',
        ticket_type_name=CODE_TICKET_NAME,
        quantity=1,
        promo_code=aggregate.promo_codes[0].code,
        user_info=buyer_info('Ravi Kumar', user_id='buyer-2'),
        now=TEST_NOW,
        ttl=RESERVATION_TTL,
    )
    aggregate.add_admin_hold(
        seat_number='C-1',
        ticket_type_name=PAID_TICKET_NAME,
        reserved_for=buyer_info('Guest Speaker', user_id=None),
        reserved_by='organizer-1',
        now=TEST_NOW,
    )
    aggregate.analytics.total_views = 8
    return aggregate, booking


@pytest.mark.unit
class TestSeatMapView:
    def test_cells_reflect_holds_and_pending_seats(self) -> None:
        aggregate, _booking = _sold_aggregate()

        seat_map = SeatMapView.from_aggregate(aggregate)

        cells = {cell.seat_number: cell for row in seat_map.rows for cell in row.seats}
        assert len(seat_map.rows) == 5
        assert len(cells) == 30
        assert cells['A-1'].is_occupied and cells['A-1'].is_reserved
        assert cells['C-1'].is_reserved and not cells['C-1'].is_occupied
        assert cells['C-1'].reserved_for.name == 'Guest Speaker'
        assert cells['D-1'].is_reserved and not cells['D-1'].is_occupied
        assert not cells['E-6'].is_reserved
        assert cells['E-6'].zone == SeatZone.BACK

    def test_totals(self) -> None:
        aggregate, _booking = _sold_aggregate()

        seat_map = SeatMapView.from_aggregate(aggregate)

        assert seat_map.total_seats == 30
        assert seat_map.booked_seats == 2
        assert seat_map.available_seats == 13 + 14
        assert (seat_map.promo_code_stats.used, seat_map.promo_code_stats.available) == (1, 14)


@pytest.mark.unit
class TestPromoCodeInventory:
    def test_splits_used_and_available_codes(self) -> None:
        aggregate, _booking = _sold_aggregate()

        inventory = PromoCodeInventory.from_aggregate(aggregate, now=TEST_NOW)

        assert (inventory.total_generated, inventory.available, inventory.used) == (15, 14, 1)
        assert inventory.used_codes[0].seat_number == 'D-1'
        assert inventory.used_codes[0].used_by.name == 'Ravi Kumar'
        assert all(code.zone == SeatZone.BACK for code in inventory.available_codes)

    def test_expired_codes_are_not_offered(self) -> None:
        aggregate, _booking = _sold_aggregate()

        inventory = PromoCodeInventory.from_aggregate(aggregate, now=TEST_NOW + timedelta(days=31))

        assert inventory.available_codes == []
        assert inventory.used == 1


@pytest.mark.unit
class TestEventAnalyticsReport:
    def test_report(self) -> None:
        aggregate, booking = _sold_aggregate()

        report = EventAnalyticsReport.from_aggregate(aggregate, bookings=[booking])

        assert report.overview.total_bookings == 1
        assert report.overview.total_revenue == 200
        assert report.overview.conversion_rate == 12.5
        paid = next(t for t in report.ticket_analytics if t.name == PAID_TICKET_NAME)
        assert paid.sold_percentage == 13.33
        assert paid.revenue == 200
        assert report.seat_occupancy.reserved_seats == 4
        assert report.seat_occupancy.occupied_seats == 2
        assert report.seat_occupancy.available_seats == 26
        assert report.promo_code_analytics.usage_rate == 6.67
        assert report.booking_stats.paid_bookings == 1
        assert report.revenue_by_ticket_type == {PAID_TICKET_NAME: 200, CODE_TICKET_NAME: 0}


@pytest.mark.unit
class TestEventListFilter:
    def _published(self, **event_overrides):
        aggregate = build_aggregate(event=build_event(**event_overrides))
        aggregate.publish(by='organizer-1', now=TEST_NOW)
        return aggregate

    def test_unpublished_events_are_hidden_by_default(self) -> None:
        assert not EventListFilter().matches(build_aggregate())
        assert EventListFilter(is_published=None).matches(build_aggregate())

    def test_search_is_case_insensitive_across_text_fields(self) -> None:
        aggregate = self._published()
        assert EventListFilter(search='blue note').matches(aggregate)
        assert EventListFilter(search='MUMBAI').matches(aggregate)
        assert not EventListFilter(search='opera').matches(aggregate)

    def test_exact_field_filters(self) -> None:
        aggregate = self._published()
        assert EventListFilter(city='mumbai', category='Music').matches(aggregate)
        assert not EventListFilter(country='Nepal').matches(aggregate)

    def test_price_range_overlap(self) -> None:
        # Free code ticket and a 100 paid ticket
        aggregate = self._published()
        assert EventListFilter(min_price=50).matches(aggregate)
        assert EventListFilter(max_price=0).matches(aggregate)
        assert not EventListFilter(min_price=150).matches(aggregate)

    def test_near_radius(self) -> None:
        aggregate = self._published()
        thane = GeoLocation(longitude=72.9781, latitude=19.2183)
        delhi = GeoLocation(longitude=77.1025, latitude=28.7041)
        assert EventListFilter(near=thane).matches(aggregate)
        assert not EventListFilter(near=delhi).matches(aggregate)
        assert EventListFilter(near=delhi, radius_km=2000).matches(aggregate)

    def test_start_date_window(self) -> None:
        aggregate = self._published()
        assert EventListFilter(start_date_from=TEST_NOW).matches(aggregate)
        assert not EventListFilter(start_date_to=TEST_NOW).matches(aggregate)

    def test_sort_key_and_paging(self) -> None:
        event_filter = EventListFilter(sort_by='title', page=3, limit=10)

        assert event_filter.sort_by == EventSortField.TITLE
        assert event_filter.sort_key(self._published(title='Zebra Jazz')) == 'zebra jazz'
        assert event_filter.offset == 20
        assert event_filter.total_pages(21) == 3
        assert event_filter.total_pages(0) == 0
