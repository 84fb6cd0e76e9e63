"""Domain models for shoots (bookings)."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class ShootStatus(StrEnum):
    """Lifecycle status of a shoot."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    EDITING = "editing"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    POSTPONED = "postponed"
    CANCELLED = "cancelled"


ISSUE_STATUSES = frozenset(
    {ShootStatus.BLOCKED, ShootStatus.POSTPONED, ShootStatus.CANCELLED}
)
ACTIVE_STATUSES = frozenset({ShootStatus.IN_PROGRESS, ShootStatus.EDITING})


class WorkflowType(StrEnum):
    """How a shoot is billed."""

    SHIFT = "shift"
    PROJECT = "project"
    CLUSTER = "cluster"


class CostStatus(StrEnum):
    """Payment state of a cost line."""

    PAID = "paid"
    UNPAID = "unpaid"
    ONHOLD = "onhold"


@dataclass(frozen=True)
class ShootType:
    """Category of shoot; its code prefixes shoot identifiers."""

    id: UUID
    name: str
    code: str


@dataclass(frozen=True)
class ShootDraft:
    """Editable fields of a shoot."""

    code: str
    client_id: UUID
    shoot_type_id: UUID
    entity_id: UUID | None = None
    location_id: UUID | None = None
    cluster_id: UUID | None = None
    project_name: str | None = None
    remarks: str | None = None
    overall_deliverables: str | None = None
    scheduled_date: date | None = None
    reporting_time: str | None = None
    wrap_up_time: str | None = None
    photographer_notes: str | None = None
    workflow_type: WorkflowType = WorkflowType.SHIFT
    shoot_cost: float | None = None
    travel_cost: float | None = None
    overall_cost: float | None = None
    shoot_cost_status: CostStatus | None = None
    travel_cost_status: CostStatus | None = None
    overall_cost_status: CostStatus | None = None
    cluster_cost_override: float | None = None
    dop_id: UUID | None = None
    executor_ids: list[UUID] = field(default_factory=list)
    edit_ids: list[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class ShootRecord:
    """Represents a persisted shoot."""

    id: UUID
    code: str
    client_id: UUID
    shoot_type_id: UUID
    status: ShootStatus
    workflow_type: WorkflowType
    created_at: datetime
    entity_id: UUID | None = None
    location_id: UUID | None = None
    cluster_id: UUID | None = None
    project_name: str | None = None
    remarks: str | None = None
    overall_deliverables: str | None = None
    scheduled_date: date | None = None
    reporting_time: str | None = None
    wrap_up_time: str | None = None
    photographer_notes: str | None = None
    shoot_cost: float | None = None
    travel_cost: float | None = None
    overall_cost: float | None = None
    shoot_cost_status: CostStatus | None = None
    travel_cost_status: CostStatus | None = None
    overall_cost_status: CostStatus | None = None
    cluster_cost_override: float | None = None
    dop_id: UUID | None = None
    executor_ids: list[UUID] = field(default_factory=list)
