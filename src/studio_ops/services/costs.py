"""Cost derivations shared by detail views and dashboards."""

from collections.abc import Iterable

from studio_ops.domain.clusters import ClusterCostSummary, ClusterRecord
from studio_ops.domain.edits import EditRecord
from studio_ops.domain.shoots import ShootRecord, WorkflowType


def derive_total(
    components: Iterable[float | None], override: float | None = None
) -> float:
    """Return the override when set, otherwise the sum of present components."""
    if override is not None:
        return float(override)
    return float(sum(value for value in components if value is not None))


def shoot_total_cost(shoot: ShootRecord) -> float:
    """Project shoots bill an overall cost, the rest bill shoot plus travel."""
    if shoot.workflow_type == WorkflowType.PROJECT:
        return derive_total([shoot.overall_cost])
    return derive_total([shoot.shoot_cost, shoot.travel_cost])


def edit_total_cost(edit: EditRecord) -> float:
    """Return the cost of an edit project."""
    return derive_total([edit.edit_cost])


def cluster_cost_summary(
    cluster: ClusterRecord,
    shoots: Iterable[ShootRecord],
    edits: Iterable[EditRecord],
) -> ClusterCostSummary:
    """Sum shoot and edit costs, honoring the cluster's explicit total."""
    shoots_cost = derive_total(shoot_total_cost(shoot) for shoot in shoots)
    edits_cost = derive_total(edit_total_cost(edit) for edit in edits)
    calculated = derive_total([shoots_cost, edits_cost])
    return ClusterCostSummary(
        shoots_cost=shoots_cost,
        edits_cost=edits_cost,
        calculated_total=calculated,
        display_total=derive_total([calculated], cluster.total_cost),
        is_override=cluster.total_cost is not None,
    )
