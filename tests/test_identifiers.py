"""Tests for identifier generation and uniqueness checks."""

import re

import pytest

from studio_ops.domain.errors import EmptyIdentifierError, GenerationExhaustedError
from studio_ops.domain.identifiers import UnavailableReason
from studio_ops.services.identifiers import (
    IdentifierService,
    check_identifier_availability,
    generate_candidate,
    require_identifier,
    resolve_unique_identifier,
)
from tests.conftest import FixedClock, SequenceRandom


def test_generate_candidate_formats_prefix_timestamp_and_random() -> None:
    candidate = generate_candidate(
        "RE", clock=FixedClock(1_700_000_123_456), random_source=SequenceRandom(7)
    )

    assert candidate == "RE-123456-007"


def test_generate_candidate_matches_pattern_with_system_sources() -> None:
    candidate = generate_candidate("EDIT")

    assert re.fullmatch(r"EDIT-\d{6}-\d{3}", candidate)


def test_generate_candidate_pads_short_clock_values() -> None:
    candidate = generate_candidate(
        "RE", clock=FixedClock(42), random_source=SequenceRandom(999)
    )

    assert candidate == "RE-000042-999"


@pytest.mark.parametrize("prefix", ["", "   "])
def test_generate_candidate_rejects_blank_prefix(prefix: str) -> None:
    with pytest.raises(ValueError):
        generate_candidate(prefix, clock=FixedClock(1), random_source=SequenceRandom(1))


def test_resolve_returns_first_free_candidate() -> None:
    taken = {"RE-123456-001", "RE-123456-002"}
    checked: list[str] = []

    def exists(candidate: str) -> bool:
        checked.append(candidate)
        return candidate in taken

    identifier = resolve_unique_identifier(
        "RE",
        exists,
        clock=FixedClock(1_700_000_123_456),
        random_source=SequenceRandom(1, 2, 3),
    )

    assert identifier == "RE-123456-003"
    assert checked == ["RE-123456-001", "RE-123456-002", "RE-123456-003"]


def test_resolve_raises_after_max_attempts() -> None:
    calls: list[str] = []

    def exists(candidate: str) -> bool:
        calls.append(candidate)
        return True

    with pytest.raises(GenerationExhaustedError) as exc_info:
        resolve_unique_identifier(
            "RE",
            exists,
            max_attempts=10,
            clock=FixedClock(1_700_000_123_456),
            random_source=SequenceRandom(5),
        )

    assert len(calls) == 10
    assert exc_info.value.prefix == "RE"
    assert exc_info.value.attempts == 10


def test_resolve_with_single_attempt_checks_once() -> None:
    calls: list[str] = []

    def exists(candidate: str) -> bool:
        calls.append(candidate)
        return True

    with pytest.raises(GenerationExhaustedError):
        resolve_unique_identifier(
            "EDIT",
            exists,
            max_attempts=1,
            clock=FixedClock(1),
            random_source=SequenceRandom(1),
        )

    assert calls == ["EDIT-000001-001"]


def test_resolve_rejects_non_positive_attempts() -> None:
    with pytest.raises(ValueError):
        resolve_unique_identifier("RE", lambda _code: False, max_attempts=0)


def test_resolve_does_not_remember_free_candidates() -> None:
    service = IdentifierService(
        clock=FixedClock(1_700_000_123_456),
        random_source=SequenceRandom(7),
    )
    taken: set[str] = set()

    first = service.generate("RE", lambda code: code in taken)
    taken.add(first)

    with pytest.raises(GenerationExhaustedError):
        service.generate("RE", lambda code: code in taken)


def test_availability_reports_empty_without_lookup() -> None:
    def exists(_candidate: str) -> bool:
        raise AssertionError("exists should not be called")

    result = check_identifier_availability("   ", exists)

    assert result.available is False
    assert result.reason == UnavailableReason.EMPTY_IDENTIFIER


def test_availability_reports_duplicates() -> None:
    result = check_identifier_availability(" RE-1 ", lambda code: code == "RE-1")

    assert result.available is False
    assert result.reason == UnavailableReason.DUPLICATE_IDENTIFIER
    assert result.code == "RE-1"


def test_availability_reports_free_code() -> None:
    result = check_identifier_availability("RE-2", lambda _code: False)

    assert result.available is True
    assert result.reason is None


def test_require_identifier_trims_and_rejects_blank() -> None:
    assert require_identifier("  RE-1 ") == "RE-1"
    with pytest.raises(EmptyIdentifierError):
        require_identifier("  ")
