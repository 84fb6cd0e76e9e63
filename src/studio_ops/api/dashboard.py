"""Dashboard endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from studio_ops.api.admin import get_container, require_admin

if TYPE_CHECKING:
    from studio_ops.domain.stats import CategoryOverview, GrowthBucket

router = APIRouter(
    prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(require_admin)]
)


@router.get("")
async def dashboard(request: Request) -> dict[str, object]:
    """Return headline counts and the shoots that need attention."""
    service = get_container(request).stats_service
    return {
        "counts": service.get_counts(),
        "issue_shoots": service.get_issue_shoots(),
        "payment_follow_ups": service.get_payment_follow_ups(),
    }


@router.get("/growth")
async def growth(
    request: Request,
    start: datetime | None = None,
    end: datetime | None = None,
) -> dict[str, object]:
    """Return growth by month, city and client, optionally within a range."""
    report = get_container(request).stats_service.get_growth_report(start, end)
    return {
        "months": [_month_view(bucket) for bucket in report.months],
        "cities": _category_view(report.cities),
        "clients": _category_view(report.clients),
    }


@router.get("/metrics")
async def metrics(request: Request) -> dict[str, object]:
    """Return scheduling activity for today, this week and this month."""
    return {"metrics": get_container(request).stats_service.get_activity_metrics()}


@router.get("/ranking")
async def ranking(request: Request) -> dict[str, object]:
    """Return active photographers ranked by rating."""
    return {"photographers": get_container(request).team_service.rank_photographers()}


def _month_view(bucket: GrowthBucket) -> dict[str, object]:
    label = datetime.strptime(bucket.key, "%Y-%m").strftime("%b %Y")  # noqa: DTZ007
    return {
        "month": bucket.key,
        "label": label,
        "count": bucket.count,
        "by_status": bucket.by_status,
    }


def _category_view(overview: CategoryOverview) -> dict[str, object]:
    return {
        "top": [
            {"name": bucket.key, "count": bucket.count, "by_status": bucket.by_status}
            for bucket in overview.top
        ],
        "other_categories": overview.overflow_categories,
        "other_records": overview.overflow_records,
    }
