"""Request bodies accepted by the back-office API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from studio_ops.domain.clusters import ClusterDraft
from studio_ops.domain.coupons import CouponDraft, CouponType
from studio_ops.domain.edits import EditDraft
from studio_ops.domain.shoots import CostStatus, ShootDraft, WorkflowType


class GenerateShootCodeRequest(BaseModel):
    shoot_type_id: UUID


class StatusUpdate(BaseModel):
    status: str


class ShootPayload(BaseModel):
    """Fields of a shoot booking."""

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
    shoot_cost: float | None = Field(default=None, ge=0)
    travel_cost: float | None = Field(default=None, ge=0)
    overall_cost: float | None = Field(default=None, ge=0)
    shoot_cost_status: CostStatus | None = None
    travel_cost_status: CostStatus | None = None
    overall_cost_status: CostStatus | None = None
    cluster_cost_override: float | None = Field(default=None, ge=0)
    dop_id: UUID | None = None
    executor_ids: list[UUID] = Field(default_factory=list)
    edit_ids: list[UUID] = Field(default_factory=list)

    def to_draft(self) -> ShootDraft:
        return ShootDraft(**self.model_dump())


class EditPayload(BaseModel):
    """Fields of an edit project."""

    code: str
    shoot_id: UUID | None = None
    deliverables: str | None = None
    delivery_date: date | None = None
    editor_notes: str | None = None
    edit_cost: float | None = Field(default=None, ge=0)
    edit_cost_status: CostStatus | None = None
    editor_ids: list[UUID] = Field(default_factory=list)

    def to_draft(self) -> EditDraft:
        return EditDraft(**self.model_dump())


class CouponPayload(BaseModel):
    """Fields of a coupon; business rules are checked by the service."""

    code: str
    type: CouponType
    value: float
    valid_from: datetime
    description: str | None = None
    min_amount: float | None = None
    max_uses: int | None = None
    valid_until: datetime | None = None
    is_active: bool = True

    def to_draft(self) -> CouponDraft:
        return CouponDraft(**self.model_dump())


class ClusterPayload(BaseModel):
    name: str
    description: str | None = None
    client_id: UUID | None = None
    total_cost: float | None = Field(default=None, ge=0)

    def to_draft(self) -> ClusterDraft:
        return ClusterDraft(**self.model_dump())
