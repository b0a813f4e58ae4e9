"""
Promo code generation

Codes are 8 uniformly random characters from A-Z0-9 rendered as XXX-XXX-XX.
Uniqueness within an event's pool is enforced by retrying, with a bounded
number of attempts per code.
"""

import secrets
import string
from typing import Callable, List, Set

from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind


CODE_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_MAX_ATTEMPTS = 100


def random_code() -> str:
    raw = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(8))
    return f'{raw[:3]}-{raw[3:6]}-{raw[6:]}'


def generate_unique_codes(
    *,
    count: int,
    existing: Set[str],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    code_source: Callable[[], str] = random_code,
) -> List[str]:
    taken = set(existing)
    codes: List[str] = []
    for _ in range(count):
        for _attempt in range(max_attempts):
            candidate = code_source()
            if candidate not in taken:
                taken.add(candidate)
                codes.append(candidate)
                break
        else:
            raise TicketingError(
                TicketingErrorKind.INTERNAL_ERROR,
                f'Could not generate a unique promo code after {max_attempts} attempts',
            )
    return codes
