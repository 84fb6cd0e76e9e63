"""Supabase queries backing the dashboard."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from studio_ops.adapters.supabase_rows import (
    PAGE_SIZE,
    fetch_all_rows,
    parse_date,
    parse_datetime,
    to_json,
)
from studio_ops.adapters.supabase_shoot_repository import parse_shoot_row
from studio_ops.domain.shoots import ShootRecord, ShootStatus
from studio_ops.domain.stats import GrowthRow
from studio_ops.services.stats import StatsRepository

_GROWTH_COLUMNS = (
    "id, created_at, status, scheduled_date, clients(name), locations(city)"
)


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for dashboard reads."""

    client: Client
    page_size: int = PAGE_SIZE

    def list_growth_rows(self) -> list[GrowthRow]:
        rows = fetch_all_rows(
            lambda: (
                self.client.table("shoots").select(_GROWTH_COLUMNS).order("created_at")
            ),
            self.page_size,
        )
        return [_parse_growth_row(row) for row in rows]

    def list_shoots_with_status(
        self, statuses: Iterable[ShootStatus], limit: int | None
    ) -> list[ShootRecord]:
        values = [to_json(status) for status in statuses]

        def build_query():  # type: ignore[no-untyped-def]
            return (
                self.client.table("shoots")
                .select("*")
                .in_("status", values)
                .order("created_at", desc=True)
            )

        if limit is None:
            rows = fetch_all_rows(build_query, self.page_size)
        else:
            rows = build_query().limit(limit).execute().data or []
        return [parse_shoot_row(row) for row in rows]


def _parse_growth_row(row: dict[str, object]) -> GrowthRow:
    client = row.get("clients") or {}
    location = row.get("locations") or {}
    return GrowthRow(
        shoot_id=UUID(str(row["id"])),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        status=str(row.get("status") or ShootStatus.PLANNED),
        client_name=client.get("name"),
        city=location.get("city"),
        scheduled_date=parse_date(row.get("scheduled_date")),
    )
