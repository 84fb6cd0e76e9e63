"""Supabase repository for clusters."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from studio_ops.adapters.supabase_edit_repository import parse_edit_row
from studio_ops.adapters.supabase_rows import (
    parse_datetime,
    parse_float,
    parse_uuid,
    to_json,
)
from studio_ops.adapters.supabase_shoot_repository import parse_shoot_row
from studio_ops.domain.clusters import ClusterDraft, ClusterRecord
from studio_ops.domain.edits import EditRecord
from studio_ops.domain.shoots import ShootRecord
from studio_ops.services.clusters import ClusterRepository


@dataclass
class SupabaseClusterRepository(ClusterRepository):
    """Supabase implementation for cluster persistence."""

    client: Client

    def create_cluster(self, draft: ClusterDraft) -> ClusterRecord:
        response = self.client.table("clusters").insert(_draft_payload(draft)).execute()
        if not response.data:
            raise RuntimeError("Failed to create cluster")
        return _parse_cluster_row(response.data[0])

    def get_cluster(self, cluster_id: UUID) -> ClusterRecord | None:
        response = (
            self.client.table("clusters")
            .select("*")
            .eq("id", str(cluster_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_cluster_row(response.data[0])

    def list_clusters(self) -> list[ClusterRecord]:
        response = (
            self.client.table("clusters")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_cluster_row(row) for row in response.data or []]

    def update_cluster(self, cluster_id: UUID, draft: ClusterDraft) -> ClusterRecord:
        response = (
            self.client.table("clusters")
            .update(_draft_payload(draft))
            .eq("id", str(cluster_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update cluster")
        return _parse_cluster_row(response.data[0])

    def delete_cluster(self, cluster_id: UUID) -> None:
        self.client.table("clusters").delete().eq("id", str(cluster_id)).execute()

    def list_cluster_shoots(self, cluster_id: UUID) -> list[ShootRecord]:
        response = (
            self.client.table("shoots")
            .select("*")
            .eq("cluster_id", str(cluster_id))
            .execute()
        )
        return [parse_shoot_row(row) for row in response.data or []]

    def list_cluster_edits(self, cluster_id: UUID) -> list[EditRecord]:
        response = (
            self.client.table("edits")
            .select("*")
            .eq("cluster_id", str(cluster_id))
            .execute()
        )
        return [parse_edit_row(row) for row in response.data or []]


def _draft_payload(draft: ClusterDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "description": draft.description,
        "client_id": to_json(draft.client_id),
        "total_cost": draft.total_cost,
    }


def _parse_cluster_row(row: dict[str, object]) -> ClusterRecord:
    return ClusterRecord(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        description=row.get("description"),
        client_id=parse_uuid(row.get("client_id")),
        total_cost=parse_float(row.get("total_cost")),
    )
