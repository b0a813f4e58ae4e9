"""Builders shared by the ticketing unit tests."""

from datetime import timedelta
from itertools import count
from typing import Callable, Iterable, List, Optional

from src.service.ticketing.app.event_transaction import UnitOfWorkFactory
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.ticket_type_entity import TicketType
from src.service.ticketing.domain.value_object.geo_location import GeoLocation
from src.service.ticketing.domain.value_object.seating_config import SeatingConfig
from src.service.ticketing.domain.value_object.user_info import UserInfo
from test.util_constant import ORGANIZER_USER, TEST_NOW


RESERVATION_TTL = timedelta(minutes=15)


def build_event(**overrides) -> Event:
    fields = {
        'id': 'evt-1',
        'title': 'Jazz Night',
        'created_by': ORGANIZER_USER.id,
        'start_date': TEST_NOW + timedelta(days=31),
        'end_date': TEST_NOW + timedelta(days=31, hours=4),
        'venue_name': 'Blue Note Hall',
        'city': 'Mumbai',
        'state': 'Maharashtra',
        'country': 'India',
        'category': 'music',
        'geo_location': GeoLocation(longitude=72.8777, latitude=19.076),
        'banner_url': 'https://cdn.test/banner.png',
        'thumbnail_url': 'https://cdn.test/thumb.png',
    }
    fields.update(overrides)
    return Event(**fields)


def sequential_codes(prefix: str = 'TST') -> Callable[[], str]:
    """Deterministic code source: TST-000-01, TST-000-02, ..."""
    numbers = count(1)
    return lambda: f'{prefix}-000-{next(numbers):02d}'


def scripted_codes(codes: Iterable[str]) -> Callable[[], str]:
    remaining = iter(codes)
    return lambda: next(remaining)


def build_aggregate(
    *,
    event: Optional[Event] = None,
    seating_config: Optional[SeatingConfig] = None,
    ticket_types: Optional[List[TicketType]] = None,
    paid_ticket_count: int = 15,
    paid_ticket_price: float = 100,
    code_ticket_count: int = 15,
) -> EventTicketingAggregate:
    return EventTicketingAggregate.create_event_with_tickets(
        event=event or build_event(),
        seating_config=seating_config or SeatingConfig(),
        now=TEST_NOW,
        ticket_types=ticket_types,
        paid_ticket_count=paid_ticket_count,
        paid_ticket_price=paid_ticket_price,
        code_ticket_count=code_ticket_count,
        code_source=sequential_codes(),
    )


def buyer_info(name: str = 'Asha Rao', user_id: Optional[str] = 'buyer-1') -> UserInfo:
    return UserInfo(
        name=name,
        email=f'{name.split()[0].lower()}@example.com',
        phone='9876543210',
        user_id=user_id,
    )


async def seed_event(
    uow_factory: UnitOfWorkFactory, aggregate: EventTicketingAggregate
) -> EventTicketingAggregate:
    async with uow_factory() as uow:
        saved = await uow.event_ticketing_command_repo.create(event_aggregate=aggregate)
        await uow.commit()
    return saved
