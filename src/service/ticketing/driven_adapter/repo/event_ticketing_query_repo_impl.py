"""
Event Ticketing Query Repository Implementation - CQRS Read Side

Listing filters run in SQL against the denormalized event columns; the
geo filter is a bounding-box prefilter plus a haversine distance.
"""

from typing import List, Optional, Tuple

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_list_filter import EventListFilter, EventSortField
from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
    IEventTicketingQueryRepo,
)
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.value_object.geo_location import EARTH_RADIUS_KM
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.event_document_mapper import (
    event_aggregate_from_document,
)


def _to_aggregate(db_event: EventModel) -> EventTicketingAggregate:
    return event_aggregate_from_document(
        db_event.document, version=db_event.version, total_views=db_event.total_views
    )


def _apply_filter(stmt: Select, event_filter: EventListFilter) -> Select:
    if event_filter.is_published is not None:
        stmt = stmt.where(EventModel.is_published == event_filter.is_published)
    if event_filter.created_by:
        stmt = stmt.where(EventModel.created_by == event_filter.created_by)

    if event_filter.search:
        pattern = f'%{event_filter.search}%'
        stmt = stmt.where(
            or_(
                EventModel.title.ilike(pattern),
                EventModel.description.ilike(pattern),
                EventModel.venue_name.ilike(pattern),
                EventModel.city.ilike(pattern),
            )
        )

    for column, wanted in (
        (EventModel.city, event_filter.city),
        (EventModel.state, event_filter.state),
        (EventModel.country, event_filter.country),
        (EventModel.category, event_filter.category),
        (EventModel.event_type, event_filter.event_type),
        (EventModel.mode, event_filter.mode),
    ):
        if wanted:
            stmt = stmt.where(func.lower(column) == wanted.lower())

    if event_filter.start_date_from:
        stmt = stmt.where(EventModel.start_date >= event_filter.start_date_from)
    if event_filter.start_date_to:
        stmt = stmt.where(EventModel.start_date <= event_filter.start_date_to)

    # Price overlap: some active ticket type falls inside [min_price, max_price]
    if event_filter.min_price is not None:
        stmt = stmt.where(EventModel.max_price >= event_filter.min_price)
    if event_filter.max_price is not None:
        stmt = stmt.where(EventModel.min_price <= event_filter.max_price)

    if event_filter.near is not None:
        near = event_filter.near
        min_lng, min_lat, max_lng, max_lat = near.bounding_box(event_filter.radius_km)
        stmt = stmt.where(
            EventModel.longitude.between(min_lng, max_lng),
            EventModel.latitude.between(min_lat, max_lat),
        )
        d_lat = func.radians(EventModel.latitude - near.latitude)
        d_lng = func.radians(EventModel.longitude - near.longitude)
        a = func.power(func.sin(d_lat / 2), 2) + func.cos(func.radians(near.latitude)) * func.cos(
            func.radians(EventModel.latitude)
        ) * func.power(func.sin(d_lng / 2), 2)
        distance_km = 2 * EARTH_RADIUS_KM * func.asin(func.sqrt(a))
        stmt = stmt.where(distance_km <= event_filter.radius_km)
    return stmt


_SORT_COLUMNS = {
    EventSortField.START_DATE: EventModel.start_date,
    EventSortField.CREATED_AT: EventModel.created_at,
    EventSortField.TITLE: func.lower(EventModel.title),
    EventSortField.PRICE: EventModel.min_price,
}


class EventTicketingQueryRepoImpl(IEventTicketingQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io(truncate_content=True)
    async def get_by_id(self, *, event_id: str) -> Optional[EventTicketingAggregate]:
        result = await self.session.execute(select(EventModel).where(EventModel.id == event_id))
        db_event = result.scalar_one_or_none()
        return _to_aggregate(db_event) if db_event else None

    @Logger.io(truncate_content=True)
    async def list_events(
        self, *, event_filter: EventListFilter
    ) -> Tuple[List[EventTicketingAggregate], int]:
        filtered = _apply_filter(select(EventModel), event_filter)

        total = await self.session.scalar(
            select(func.count()).select_from(filtered.subquery())
        )

        sort_column = _SORT_COLUMNS[event_filter.sort_by]
        order = sort_column.desc() if event_filter.descending else sort_column.asc()
        result = await self.session.execute(
            filtered.order_by(order, EventModel.id)
            .offset(event_filter.offset)
            .limit(event_filter.limit)
        )
        events = [_to_aggregate(db_event) for db_event in result.scalars().all()]
        return events, total or 0

    @Logger.io
    async def increment_views(self, *, event_id: str) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event_id)
            .values(total_views=EventModel.total_views + 1)
        )
