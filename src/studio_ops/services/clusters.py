"""Cluster management."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from studio_ops.domain.clusters import ClusterCostSummary, ClusterDraft, ClusterRecord
from studio_ops.domain.edits import EditRecord
from studio_ops.domain.errors import InvalidInputError, RecordNotFoundError
from studio_ops.domain.shoots import ShootRecord
from studio_ops.services.costs import cluster_cost_summary


class ClusterRepository(Protocol):
    """Persistence interface for clusters."""

    def create_cluster(self, draft: ClusterDraft) -> ClusterRecord:
        """Insert a cluster and return it."""

    def get_cluster(self, cluster_id: UUID) -> ClusterRecord | None:
        """Return a cluster by id, if present."""

    def list_clusters(self) -> list[ClusterRecord]:
        """Return all clusters, newest first."""

    def update_cluster(self, cluster_id: UUID, draft: ClusterDraft) -> ClusterRecord:
        """Update a cluster and return it."""

    def delete_cluster(self, cluster_id: UUID) -> None:
        """Delete a cluster."""

    def list_cluster_shoots(self, cluster_id: UUID) -> list[ShootRecord]:
        """Return shoots grouped in a cluster."""

    def list_cluster_edits(self, cluster_id: UUID) -> list[EditRecord]:
        """Return edit projects grouped in a cluster."""


@dataclass
class ClusterService:
    """Application service for clusters."""

    repository: ClusterRepository

    def create_cluster(self, draft: ClusterDraft) -> ClusterRecord:
        """Create a cluster."""
        return self.repository.create_cluster(_validate(draft))

    def get_cluster(self, cluster_id: UUID) -> ClusterRecord:
        """Return a cluster or raise RecordNotFoundError."""
        cluster = self.repository.get_cluster(cluster_id)
        if cluster is None:
            raise RecordNotFoundError("Cluster", cluster_id)
        return cluster

    def list_clusters(self) -> list[ClusterRecord]:
        """Return all clusters, newest first."""
        return self.repository.list_clusters()

    def update_cluster(self, cluster_id: UUID, draft: ClusterDraft) -> ClusterRecord:
        """Update a cluster."""
        self.get_cluster(cluster_id)
        return self.repository.update_cluster(cluster_id, _validate(draft))

    def delete_cluster(self, cluster_id: UUID) -> None:
        """Delete a cluster."""
        self.get_cluster(cluster_id)
        self.repository.delete_cluster(cluster_id)

    def get_cost_summary(self, cluster_id: UUID) -> ClusterCostSummary:
        """Return the cost breakdown of a cluster."""
        cluster = self.get_cluster(cluster_id)
        return cluster_cost_summary(
            cluster,
            self.repository.list_cluster_shoots(cluster_id),
            self.repository.list_cluster_edits(cluster_id),
        )


def _validate(draft: ClusterDraft) -> ClusterDraft:
    name = draft.name.strip()
    if not name:
        raise InvalidInputError("Cluster name is required")
    return replace(draft, name=name)
