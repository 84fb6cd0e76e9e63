"""Helpers for converting Supabase rows and errors."""

from collections.abc import Callable
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from postgrest.exceptions import APIError

UNIQUE_VIOLATION = "23505"
# PostgREST's default max-rows cap.
PAGE_SIZE = 1000


def fetch_all_rows(
    build_query: Callable[[], Any], page_size: int = PAGE_SIZE
) -> list[dict[str, object]]:
    """Read every row of a select, one ``range`` page at a time."""
    rows: list[dict[str, object]] = []
    start = 0
    while True:
        response = build_query().range(start, start + page_size - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size


def is_unique_violation(exc: APIError) -> bool:
    """Return whether PostgREST reported a unique constraint violation."""
    return str(getattr(exc, "code", "")) == UNIQUE_VIOLATION


def to_json(value: object) -> object:
    """Convert a domain value into something Supabase can serialize."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_date(raw: object) -> date | None:
    """Parse a date column, accepting full timestamps too."""
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def parse_uuid(raw: object) -> UUID | None:
    """Parse an optional UUID column."""
    if raw is None or raw == "":
        return None
    return UUID(str(raw))


def parse_float(raw: object) -> float | None:
    """Parse an optional numeric column."""
    if raw is None:
        return None
    return float(raw)
