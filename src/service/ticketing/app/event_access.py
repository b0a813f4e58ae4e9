from typing import Optional

from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
    IEventTicketingCommandRepo,
)
from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
    IEventTicketingQueryRepo,
)
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


async def get_event_or_raise(
    repo: IEventTicketingCommandRepo | IEventTicketingQueryRepo, *, event_id: str
) -> EventTicketingAggregate:
    aggregate = await repo.get_by_id(event_id=event_id)
    if aggregate is None:
        raise TicketingError(TicketingErrorKind.EVENT_NOT_FOUND, f'Event {event_id} not found')
    return aggregate


def ensure_can_manage(principal: Optional[UserEntity], aggregate: EventTicketingAggregate) -> None:
    """Admins manage every event, organizers only the ones they created."""
    if principal is None or not principal.can_manage(created_by=aggregate.event.created_by):
        raise ForbiddenError('You can only manage events you created')
