"""
Event transaction runner

Every read-modify-write against an event aggregate goes through here:
- a fresh unit of work per attempt (nothing leaks between attempts)
- a deadline per attempt (`timeout` when the store round-trip overruns, nothing committed)
- bounded retries on optimistic version conflicts (`contention` on exhaustion)
"""

from typing import Awaitable, Callable, TypeVar

import anyio

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConcurrencyConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


_T = TypeVar('_T')

UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


async def run_event_transaction(
    *,
    uow_factory: UnitOfWorkFactory,
    work: Callable[[AbstractUnitOfWork], Awaitable[_T]],
    operation: str,
    max_retries: int,
    timeout_seconds: float,
) -> _T:
    """Run `work` inside a unit of work and commit; `work` must be safe to re-run from scratch."""
    attempt = 0
    while True:
        try:
            with anyio.fail_after(timeout_seconds):
                async with uow_factory() as uow:
                    result = await work(uow)
                    await uow.commit()
                    return result
        except ConcurrencyConflictError as e:
            if attempt >= max_retries:
                metrics.record_transaction_failure(operation=operation, reason='contention')
                raise TicketingError(
                    TicketingErrorKind.CONTENTION,
                    'The event is busy, please try again',
                ) from e
            attempt += 1
            metrics.record_transaction_retry(operation=operation)
            Logger.base.warning(
                f'🔁 [{operation}] Version conflict, retrying ({attempt}/{max_retries})'
            )
        except TimeoutError as e:
            metrics.record_transaction_failure(operation=operation, reason='timeout')
            raise TicketingError(
                TicketingErrorKind.TIMEOUT,
                f'Store did not answer within {timeout_seconds:g}s',
            ) from e
