"""Domain models for dashboard statistics."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class GrowthRow:
    """Minimal view of a shoot used for growth reporting."""

    shoot_id: UUID
    created_at: datetime
    status: str
    client_name: str | None = None
    city: str | None = None
    scheduled_date: date | None = None


@dataclass(frozen=True)
class GrowthBucket:
    """Record count for one month or category, broken down by status."""

    key: str
    count: int
    by_status: dict[str, int]

    def status_count(self, status: str) -> int:
        """Return how many records in the bucket hold a status."""
        return self.by_status.get(status, 0)


@dataclass(frozen=True)
class CategoryOverview:
    """Top categories plus a summary of the ones left out."""

    top: list[GrowthBucket]
    overflow_categories: int
    overflow_records: int


@dataclass(frozen=True)
class GrowthReport:
    """Growth by creation month, by city and by client."""

    months: list[GrowthBucket]
    cities: CategoryOverview
    clients: CategoryOverview


@dataclass(frozen=True)
class DashboardCounts:
    """Headline shoot counts."""

    total: int
    planned: int
    in_progress: int
    delivered: int


@dataclass(frozen=True)
class ActivityMetrics:
    """Shoot activity relative to the current day."""

    scheduled_today: int
    scheduled_last_7_days: int
    scheduled_this_month: int
    active: int
    delivered_today: int
