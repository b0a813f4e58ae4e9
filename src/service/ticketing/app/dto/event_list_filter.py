"""Event listing filter shared by the list use case and the query repositories."""

from datetime import datetime
from enum import StrEnum
import math
from typing import Optional

import attrs

from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.value_object.geo_location import (
    DEFAULT_NEAR_RADIUS_KM,
    GeoLocation,
)


class EventSortField(StrEnum):
    START_DATE = 'startDate'
    CREATED_AT = 'createdAt'
    TITLE = 'title'
    PRICE = 'price'


@attrs.frozen
class EventListFilter:
    search: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    category: Optional[str] = None
    event_type: Optional[str] = None
    mode: Optional[str] = None
    start_date_from: Optional[datetime] = None
    start_date_to: Optional[datetime] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    near: Optional[GeoLocation] = None
    radius_km: float = DEFAULT_NEAR_RADIUS_KM
    # None lists both published and unpublished events
    is_published: Optional[bool] = True
    created_by: Optional[str] = None
    sort_by: EventSortField = attrs.field(default=EventSortField.START_DATE, converter=EventSortField)
    descending: bool = False
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit) if self.limit else 0

    def matches(self, aggregate: EventTicketingAggregate) -> bool:
        """In-process evaluation of the filter (same semantics as the SQL query)."""
        event = aggregate.event
        if self.is_published is not None and event.is_published != self.is_published:
            return False
        if self.created_by and event.created_by != self.created_by:
            return False
        if self.search:
            needle = self.search.lower()
            haystack = (event.title, event.description, event.venue_name, event.city)
            if not any(needle in (value or '').lower() for value in haystack):
                return False
        for wanted, actual in (
            (self.city, event.city),
            (self.state, event.state),
            (self.country, event.country),
            (self.category, event.category),
            (self.event_type, event.event_type),
            (self.mode, event.mode),
        ):
            if wanted and (actual or '').lower() != wanted.lower():
                return False
        if self.start_date_from and event.start_date < self.start_date_from:
            return False
        if self.start_date_to and event.start_date > self.start_date_to:
            return False
        if self.min_price is not None or self.max_price is not None:
            low, high = aggregate.price_range()
            if low is None or high is None:
                return False
            if self.min_price is not None and high < self.min_price:
                return False
            if self.max_price is not None and low > self.max_price:
                return False
        if self.near is not None:
            if event.geo_location is None:
                return False
            if self.near.distance_km(event.geo_location) > self.radius_km:
                return False
        return True

    def sort_key(self, aggregate: EventTicketingAggregate):
        event = aggregate.event
        match self.sort_by:
            case EventSortField.CREATED_AT:
                return event.created_at or datetime.min
            case EventSortField.TITLE:
                return event.title.lower()
            case EventSortField.PRICE:
                low, _high = aggregate.price_range()
                return low if low is not None else 0.0
            case _:
                return event.start_date
