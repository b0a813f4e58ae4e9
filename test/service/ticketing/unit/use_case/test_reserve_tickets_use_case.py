"""
Unit tests for ReserveTicketsUseCase

Key points:
1. Oversell safety: concurrent reservations never exceed inventory or share a seat
2. Version conflicts are retried, then surface as `contention`
3. A store that overruns the deadline surfaces `timeout` and commits nothing
"""

import anyio
import pytest

from src.platform.config.core_setting import Settings
from src.service.ticketing.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    CODE_TICKET_NAME,
    PAID_TICKET_NAME,
)
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from test.service.ticketing.in_memory_uow import InMemoryStore
from test.service.ticketing.unit.helpers import build_aggregate, buyer_info, seed_event
from test.shared.utils import FrozenClock
from test.util_constant import TEST_NOW


@pytest.mark.unit
class TestReserveTickets:
    @pytest.fixture
    async def event_id(self, uow_factory) -> str:
        aggregate = await seed_event(uow_factory, build_aggregate())
        return aggregate.event_id

    async def _reserve(self, use_case: ReserveTicketsUseCase, event_id: str, **overrides):
        kwargs = {
            'event_id': event_id,
            'ticket_type': PAID_TICKET_NAME,
            'quantity': 1,
            'promo_code': None,
            'user_info': buyer_info(),
        }
        kwargs.update(overrides)
        return await use_case.reserve(**kwargs)

    @pytest.mark.asyncio
    async def test_reserve_persists_event_and_token(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        reservation = await self._reserve(reserve_use_case, event_id, quantity=2)

        assert reservation.seats == ['A-1', 'A-2']
        assert reservation.created_at == TEST_NOW
        assert store.load_reservation(reservation.reservation_id).seats == ['A-1', 'A-2']
        stored = store.load_event(event_id)
        assert stored.find_ticket_type(PAID_TICKET_NAME).reserved_quantity == 2
        assert set(stored.pending_seats.values()) == {reservation.reservation_id}
        assert stored.version == 2

    @pytest.mark.asyncio
    async def test_unknown_event(self, reserve_use_case: ReserveTicketsUseCase):
        with pytest.raises(TicketingError) as exc_info:
            await self._reserve(reserve_use_case, 'missing-event')
        assert exc_info.value.kind == TicketingErrorKind.EVENT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_rejection_commits_nothing(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        with pytest.raises(TicketingError) as exc_info:
            await self._reserve(reserve_use_case, event_id, ticket_type=CODE_TICKET_NAME)

        assert exc_info.value.kind == TicketingErrorKind.PROMO_REQUIRED
        assert store.commit_count == 1  # the seed only
        assert store.reservations == {}

    @pytest.mark.asyncio
    async def test_concurrent_reservations_never_oversell(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        outcomes: list = []

        async def attempt() -> None:
            try:
                outcomes.append(await self._reserve(reserve_use_case, event_id))
            except TicketingError as e:
                outcomes.append(e)

        async with anyio.create_task_group() as tg:
            for _ in range(20):
                tg.start_soon(attempt)

        reservations = [o for o in outcomes if isinstance(o, Reservation)]
        errors = [o for o in outcomes if isinstance(o, TicketingError)]
        assert len(reservations) + len(errors) == 20
        assert len(reservations) <= 15
        assert {e.kind for e in errors} <= {
            TicketingErrorKind.INSUFFICIENT_INVENTORY,
            TicketingErrorKind.CONTENTION,
        }

        seats = [seat for r in reservations for seat in r.seats]
        assert len(seats) == len(set(seats))

        stored = store.load_event(event_id)
        paid = stored.find_ticket_type(PAID_TICKET_NAME)
        assert paid.reserved_quantity == len(reservations)
        assert sorted(stored.pending_seats) == sorted(seats)
        assert len(store.reservations) == len(reservations)

    @pytest.mark.asyncio
    async def test_racing_on_one_code_lets_exactly_one_through(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        code = store.load_event(event_id).promo_codes[0].code
        outcomes: list = []

        async def attempt() -> None:
            try:
                outcomes.append(
                    await self._reserve(
                        reserve_use_case, event_id, ticket_type=CODE_TICKET_NAME, promo_code=code
                    )
                )
            except TicketingError as e:
                outcomes.append(e)

        async with anyio.create_task_group() as tg:
            tg.start_soon(attempt)
            tg.start_soon(attempt)

        reservations = [o for o in outcomes if isinstance(o, Reservation)]
        errors = [o for o in outcomes if isinstance(o, TicketingError)]
        assert len(reservations) == 1
        assert reservations[0].seats == ['D-1']
        assert [e.kind for e in errors] == [TicketingErrorKind.INVALID_PROMO]

        stored = store.load_event(event_id)
        assert stored.find_promo_code(code).used_count == 1
        assert stored.find_ticket_type(CODE_TICKET_NAME).reserved_quantity == 1
        assert len(store.reservations) == 1

    @pytest.mark.asyncio
    async def test_conflicts_are_retried(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        store.forced_conflicts = 2

        reservation = await self._reserve(reserve_use_case, event_id)

        assert reservation.seats == ['A-1']
        assert store.conflict_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_surface_contention(
        self, reserve_use_case: ReserveTicketsUseCase, store: InMemoryStore, event_id: str
    ):
        # One initial attempt plus three retries
        store.forced_conflicts = 4

        with pytest.raises(TicketingError) as exc_info:
            await self._reserve(reserve_use_case, event_id)

        assert exc_info.value.kind == TicketingErrorKind.CONTENTION
        assert exc_info.value.status_code == 409
        assert store.load_event(event_id).find_ticket_type(PAID_TICKET_NAME).reserved_quantity == 0

    @pytest.mark.asyncio
    async def test_slow_store_times_out_without_writing(
        self, uow_factory, clock: FrozenClock, store: InMemoryStore, event_id: str
    ):
        use_case = ReserveTicketsUseCase(
            uow_factory=uow_factory,
            clock=clock,
            settings=Settings(STORE_TIMEOUT_SECONDS=0.05),
        )
        store.latency_seconds = 0.2

        with pytest.raises(TicketingError) as exc_info:
            await self._reserve(use_case, event_id)

        store.latency_seconds = 0
        assert exc_info.value.kind == TicketingErrorKind.TIMEOUT
        assert exc_info.value.status_code == 504
        assert store.reservations == {}
        assert store.load_event(event_id).pending_seats == {}
