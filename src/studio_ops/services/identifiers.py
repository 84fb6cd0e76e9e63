"""Human-readable identifier generation for shoots and edit projects.

Identifiers look like ``RE-123456-007``: a category prefix, the last six
digits of the current Unix time in milliseconds and a three digit random
number. Candidates are checked against the persistence layer until a free one
is found or the attempt budget runs out.
"""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass

from studio_ops.domain.errors import EmptyIdentifierError, GenerationExhaustedError
from studio_ops.domain.identifiers import IdentifierAvailability, UnavailableReason

Clock = Callable[[], int]
RandomSource = Callable[[int], int]
ExistsCheck = Callable[[str], bool]

DEFAULT_MAX_ATTEMPTS = 10
_TIMESTAMP_DIGITS = 6
_RANDOM_DIGITS = 3
_RANDOM_UPPER_BOUND = 1000

_logger = logging.getLogger(__name__)


def system_clock() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def system_random(upper_bound: int) -> int:
    """Return a random integer in ``[0, upper_bound)``."""
    return random.randrange(upper_bound)  # noqa: S311


def generate_candidate(
    prefix: str,
    clock: Clock = system_clock,
    random_source: RandomSource = system_random,
) -> str:
    """Build a candidate identifier; uniqueness is not guaranteed."""
    if not prefix or not prefix.strip():
        raise ValueError("Identifier prefix must not be blank")
    timestamp = str(clock())[-_TIMESTAMP_DIGITS:].rjust(_TIMESTAMP_DIGITS, "0")
    suffix = str(random_source(_RANDOM_UPPER_BOUND)).rjust(_RANDOM_DIGITS, "0")
    return f"{prefix}-{timestamp}-{suffix}"


def resolve_unique_identifier(
    prefix: str,
    exists: ExistsCheck,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    clock: Clock = system_clock,
    random_source: RandomSource = system_random,
) -> str:
    """Return the first generated candidate that ``exists`` reports as free.

    Attempts run sequentially. Raises ``GenerationExhaustedError`` when every
    attempt collides. A free candidate can still be claimed by a concurrent
    request before it is inserted; the insert must rely on the storage unique
    constraint for that case.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    for attempt in range(1, max_attempts + 1):
        candidate = generate_candidate(prefix, clock, random_source)
        if not exists(candidate):
            return candidate
        _logger.debug(
            "Identifier collision: candidate=%s attempt=%s/%s",
            candidate,
            attempt,
            max_attempts,
        )
    _logger.error(
        "Identifier generation exhausted: prefix=%s attempts=%s",
        prefix,
        max_attempts,
    )
    raise GenerationExhaustedError(prefix, max_attempts)


def require_identifier(raw: str) -> str:
    """Trim a manually entered identifier, rejecting blank input."""
    code = raw.strip()
    if not code:
        raise EmptyIdentifierError
    return code


def check_identifier_availability(
    candidate: str, exists: ExistsCheck
) -> IdentifierAvailability:
    """Check a manually entered identifier before it is submitted."""
    code = candidate.strip()
    if not code:
        return IdentifierAvailability(
            code=code, available=False, reason=UnavailableReason.EMPTY_IDENTIFIER
        )
    if exists(code):
        return IdentifierAvailability(
            code=code,
            available=False,
            reason=UnavailableReason.DUPLICATE_IDENTIFIER,
        )
    return IdentifierAvailability(code=code, available=True)


@dataclass
class IdentifierService:
    """Holds the time and random sources used for identifier generation."""

    clock: Clock = system_clock
    random_source: RandomSource = system_random
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def generate(self, prefix: str, exists: ExistsCheck) -> str:
        """Generate an identifier that is free at the time of the check."""
        return resolve_unique_identifier(
            prefix,
            exists,
            max_attempts=self.max_attempts,
            clock=self.clock,
            random_source=self.random_source,
        )

    def check_availability(
        self, candidate: str, exists: ExistsCheck
    ) -> IdentifierAvailability:
        """Check a manually entered identifier."""
        return check_identifier_availability(candidate, exists)
