"""Domain models for shoot clusters."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ClusterDraft:
    """Editable fields of a cluster."""

    name: str
    description: str | None = None
    client_id: UUID | None = None
    total_cost: float | None = None


@dataclass(frozen=True)
class ClusterRecord:
    """A group of shoots billed together."""

    id: UUID
    name: str
    created_at: datetime
    description: str | None = None
    client_id: UUID | None = None
    total_cost: float | None = None


@dataclass(frozen=True)
class ClusterCostSummary:
    """Cost breakdown displayed for a cluster."""

    shoots_cost: float
    edits_cost: float
    calculated_total: float
    display_total: float
    is_override: bool
