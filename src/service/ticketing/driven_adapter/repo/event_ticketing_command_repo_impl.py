"""
Event Ticketing Command Repository Implementation - CQRS Write Side

The aggregate is one `event` row: JSONB document + listing columns + version.
Saves are compare-and-swap on the version column; nothing here commits,
the caller's unit of work owns the transaction.
"""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConcurrencyConflictError, DuplicateKeyError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
    IEventTicketingCommandRepo,
)
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.event_document_mapper import (
    event_aggregate_from_document,
    event_columns,
)


class EventTicketingCommandRepoImpl(IEventTicketingCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io(truncate_content=True)
    async def get_by_id(self, *, event_id: str) -> Optional[EventTicketingAggregate]:
        result = await self.session.execute(select(EventModel).where(EventModel.id == event_id))
        db_event = result.scalar_one_or_none()
        if db_event is None:
            return None
        return event_aggregate_from_document(
            db_event.document, version=db_event.version, total_views=db_event.total_views
        )

    @Logger.io(truncate_content=True)
    async def create(self, *, event_aggregate: EventTicketingAggregate) -> EventTicketingAggregate:
        db_event = EventModel(
            id=event_aggregate.event_id,
            version=1,
            total_views=event_aggregate.analytics.total_views,
            **event_columns(event_aggregate),
        )
        self.session.add(db_event)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateKeyError(
                f'Event {event_aggregate.event_id} already exists', key='id'
            ) from e

        event_aggregate.version = 1
        Logger.base.info(f'🗾 [CREATE_AGGREGATE] Created event {event_aggregate.event_id}')
        return event_aggregate

    @Logger.io(truncate_content=True)
    async def update(self, *, event_aggregate: EventTicketingAggregate) -> EventTicketingAggregate:
        result = await self.session.execute(
            update(EventModel)
            .where(
                EventModel.id == event_aggregate.event_id,
                EventModel.version == event_aggregate.version,
            )
            .values(version=EventModel.version + 1, **event_columns(event_aggregate))
        )
        if result.rowcount == 0:  # pyright: ignore[reportAttributeAccessIssue]
            raise ConcurrencyConflictError(
                f'Event {event_aggregate.event_id} changed since version {event_aggregate.version}'
            )

        event_aggregate.version += 1
        return event_aggregate

    @Logger.io
    async def delete(self, *, event_id: str) -> bool:
        result = await self.session.execute(delete(EventModel).where(EventModel.id == event_id))
        return result.rowcount > 0  # pyright: ignore[reportAttributeAccessIssue]
