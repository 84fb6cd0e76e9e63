"""Domain models for edit (deliverable) projects."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from studio_ops.domain.shoots import CostStatus

EDIT_PREFIX = "EDIT"


class EditStatus(StrEnum):
    """Lifecycle status of an edit project."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELIVERED = "delivered"


@dataclass(frozen=True)
class EditDraft:
    """Editable fields of an edit project."""

    code: str
    shoot_id: UUID | None = None
    deliverables: str | None = None
    delivery_date: date | None = None
    editor_notes: str | None = None
    edit_cost: float | None = None
    edit_cost_status: CostStatus | None = None
    editor_ids: list[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class EditRecord:
    """Represents a persisted edit project."""

    id: UUID
    code: str
    status: EditStatus
    created_at: datetime
    shoot_id: UUID | None = None
    cluster_id: UUID | None = None
    deliverables: str | None = None
    delivery_date: date | None = None
    editor_notes: str | None = None
    edit_cost: float | None = None
    edit_cost_status: CostStatus | None = None
    editor_ids: list[UUID] = field(default_factory=list)
