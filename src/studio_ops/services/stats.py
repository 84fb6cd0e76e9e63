"""Dashboard statistics for shoots."""

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from studio_ops.domain.shoots import (
    ACTIVE_STATUSES,
    ISSUE_STATUSES,
    CostStatus,
    ShootRecord,
    ShootStatus,
    WorkflowType,
)
from studio_ops.domain.stats import (
    ActivityMetrics,
    CategoryOverview,
    DashboardCounts,
    GrowthBucket,
    GrowthReport,
    GrowthRow,
)

UNKNOWN_CATEGORY = "Unknown"
DEFAULT_MONTH_WINDOW = 6
DEFAULT_CATEGORY_LIMIT = 6
DEFAULT_LIST_LIMIT = 10

_UNSETTLED_COST_STATUSES = frozenset({CostStatus.UNPAID, CostStatus.ONHOLD})

_logger = logging.getLogger(__name__)


class StatsRepository(Protocol):
    """Persistence interface for dashboard queries."""

    def list_growth_rows(self) -> list[GrowthRow]:
        """Return every shoot with its client name and city."""

    def list_shoots_with_status(
        self, statuses: Iterable[ShootStatus], limit: int | None
    ) -> list[ShootRecord]:
        """Return shoots holding one of the statuses, newest first."""


def month_key(timestamp: datetime) -> str:
    """Return the UTC ``YYYY-MM`` month of a timestamp; naive values are UTC."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(UTC)
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def bucket_by_month(
    records: Iterable[tuple[datetime, str]],
) -> dict[str, GrowthBucket]:
    """Group ``(created_at, status)`` pairs by month, oldest month first."""
    buckets = _collect(
        (month_key(created_at), status) for created_at, status in records
    )
    return dict(sorted(buckets.items()))


def bucket_by_category(records: Iterable[tuple[str, str]]) -> dict[str, GrowthBucket]:
    """Group ``(category, status)`` pairs by category."""
    return _collect(records)


def latest_months(
    buckets: dict[str, GrowthBucket], limit: int = DEFAULT_MONTH_WINDOW
) -> list[GrowthBucket]:
    """Return the most recent month buckets in chronological order."""
    if limit <= 0:
        return []
    keys = sorted(buckets)[-limit:]
    return [buckets[key] for key in keys]


def top_categories(
    buckets: dict[str, GrowthBucket], limit: int = DEFAULT_CATEGORY_LIMIT
) -> CategoryOverview:
    """Return the largest category buckets and summarize the rest."""
    ranked = sorted(buckets.values(), key=lambda bucket: (-bucket.count, bucket.key))
    top = ranked[: max(limit, 0)]
    rest = ranked[len(top) :]
    return CategoryOverview(
        top=top,
        overflow_categories=len(rest),
        overflow_records=sum(bucket.count for bucket in rest),
    )


def needs_payment_follow_up(shoot: ShootRecord) -> bool:
    """Delivered shoots with a missing or unsettled cost need follow-up."""
    if shoot.status != ShootStatus.DELIVERED:
        return False
    if shoot.workflow_type == WorkflowType.PROJECT:
        amount = shoot.overall_cost
        statuses = [shoot.overall_cost_status]
    else:
        amount = shoot.shoot_cost
        statuses = [shoot.shoot_cost_status, shoot.travel_cost_status]
    if amount is None:
        return True
    return any(status in _UNSETTLED_COST_STATUSES for status in statuses)


def _collect(entries: Iterable[tuple[str, str]]) -> dict[str, GrowthBucket]:
    counters: dict[str, Counter[str]] = defaultdict(Counter)
    for key, status in entries:
        counters[key][str(status)] += 1
    return {
        key: GrowthBucket(
            key=key, count=sum(counter.values()), by_status=dict(counter)
        )
        for key, counter in counters.items()
    }


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class StatsService:
    """Service computing dashboard figures from already-fetched shoots."""

    repository: StatsRepository
    month_window: int = DEFAULT_MONTH_WINDOW
    category_limit: int = DEFAULT_CATEGORY_LIMIT
    list_limit: int = DEFAULT_LIST_LIMIT
    clock: Callable[[], datetime] = field(default=_utc_now)

    def get_counts(self) -> DashboardCounts:
        """Return headline shoot counts."""
        statuses = Counter(row.status for row in self.repository.list_growth_rows())
        return DashboardCounts(
            total=sum(statuses.values()),
            planned=statuses[ShootStatus.PLANNED],
            in_progress=statuses[ShootStatus.IN_PROGRESS],
            delivered=statuses[ShootStatus.DELIVERED],
        )

    def get_growth_report(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> GrowthReport:
        """Return growth by creation month, city and client.

        Without a range only the latest ``month_window`` months are kept; with
        a range every month between ``start`` and ``end`` (inclusive) is kept.
        """
        rows = self.repository.list_growth_rows()
        ranged = start is not None or end is not None
        if ranged:
            rows = [row for row in rows if _within(row.created_at, start, end)]
        buckets = bucket_by_month((row.created_at, row.status) for row in rows)
        _logger.debug("Growth months: %s", list(buckets))
        if ranged:
            months = list(buckets.values())
        else:
            months = latest_months(buckets, self.month_window)
        return GrowthReport(
            months=months,
            cities=top_categories(
                bucket_by_category(
                    (row.city or UNKNOWN_CATEGORY, row.status) for row in rows
                ),
                self.category_limit,
            ),
            clients=top_categories(
                bucket_by_category(
                    (row.client_name or UNKNOWN_CATEGORY, row.status) for row in rows
                ),
                self.category_limit,
            ),
        )

    def get_issue_shoots(self) -> list[ShootRecord]:
        """Return blocked, postponed and cancelled shoots."""
        return self.repository.list_shoots_with_status(
            sorted(ISSUE_STATUSES), self.list_limit
        )

    def get_payment_follow_ups(self) -> list[ShootRecord]:
        """Return delivered shoots whose cost is missing or unsettled."""
        delivered = self.repository.list_shoots_with_status(
            [ShootStatus.DELIVERED], None
        )
        return [shoot for shoot in delivered if needs_payment_follow_up(shoot)][
            : self.list_limit
        ]

    def get_activity_metrics(self) -> ActivityMetrics:
        """Return scheduling activity counted from today (UTC) onward.

        Each window is open-ended, so shoots booked in the future count too.
        """
        today = self.clock().astimezone(UTC).date()
        week_start = today - timedelta(days=7)
        month_start = today.replace(day=1)
        rows = self.repository.list_growth_rows()
        scheduled = [row for row in rows if row.scheduled_date is not None]
        return ActivityMetrics(
            scheduled_today=sum(1 for row in scheduled if row.scheduled_date >= today),
            scheduled_last_7_days=sum(
                1 for row in scheduled if row.scheduled_date >= week_start
            ),
            scheduled_this_month=sum(
                1 for row in scheduled if row.scheduled_date >= month_start
            ),
            active=sum(1 for row in rows if row.status in ACTIVE_STATUSES),
            delivered_today=sum(
                1
                for row in scheduled
                if row.status == ShootStatus.DELIVERED and row.scheduled_date >= today
            ),
        )


def _within(value: datetime, start: datetime | None, end: datetime | None) -> bool:
    value = _as_utc(value)
    if start is not None and value < _as_utc(start):
        return False
    return not (end is not None and value > _as_utc(end))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
