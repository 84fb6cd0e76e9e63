"""Supabase repository for shoots."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from studio_ops.adapters.supabase_rows import (
    is_unique_violation,
    parse_date,
    parse_datetime,
    parse_float,
    parse_uuid,
    to_json,
)
from studio_ops.domain.errors import DuplicateIdentifierError
from studio_ops.domain.shoots import (
    CostStatus,
    ShootDraft,
    ShootRecord,
    ShootStatus,
    ShootType,
    WorkflowType,
)
from studio_ops.services.shoots import ShootRepository

_DRAFT_COLUMNS = (
    "code",
    "client_id",
    "shoot_type_id",
    "entity_id",
    "location_id",
    "cluster_id",
    "project_name",
    "remarks",
    "overall_deliverables",
    "scheduled_date",
    "reporting_time",
    "wrap_up_time",
    "photographer_notes",
    "workflow_type",
    "shoot_cost",
    "travel_cost",
    "overall_cost",
    "shoot_cost_status",
    "travel_cost_status",
    "overall_cost_status",
    "cluster_cost_override",
    "dop_id",
)


@dataclass
class SupabaseShootRepository(ShootRepository):
    """Supabase implementation for shoot persistence."""

    client: Client

    def code_exists(self, code: str) -> bool:
        """Return whether a shoot already uses the code."""
        response = (
            self.client.table("shoots").select("id").eq("code", code).limit(1).execute()
        )
        return bool(response.data)

    def get_shoot_type(self, shoot_type_id: UUID) -> ShootType | None:
        """Return a shoot type by id, if present."""
        response = (
            self.client.table("shoot_types")
            .select("id, name, code")
            .eq("id", str(shoot_type_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ShootType(id=UUID(row["id"]), name=str(row["name"]), code=row["code"])

    def create_shoot(self, draft: ShootDraft, status: ShootStatus) -> ShootRecord:
        """Insert a shoot row and return it."""
        payload = {**_draft_payload(draft), "status": status.value}
        try:
            response = self.client.table("shoots").insert(payload).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create shoot")
        return parse_shoot_row(response.data[0])

    def get_shoot(self, shoot_id: UUID) -> ShootRecord | None:
        """Return a shoot with its executors, if present."""
        response = (
            self.client.table("shoots")
            .select("*")
            .eq("id", str(shoot_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        executors = (
            self.client.table("shoot_executors")
            .select("user_id")
            .eq("shoot_id", str(shoot_id))
            .execute()
        )
        return parse_shoot_row(
            response.data[0],
            executor_ids=[UUID(row["user_id"]) for row in executors.data or []],
        )

    def list_shoots(self) -> list[ShootRecord]:
        """Return all shoots, newest first."""
        response = (
            self.client.table("shoots")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_shoot_row(row) for row in response.data or []]

    def update_shoot(self, shoot_id: UUID, draft: ShootDraft) -> ShootRecord:
        """Update a shoot row and return it."""
        try:
            response = (
                self.client.table("shoots")
                .update(_draft_payload(draft))
                .eq("id", str(shoot_id))
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to update shoot")
        return parse_shoot_row(response.data[0])

    def update_status(self, shoot_id: UUID, status: ShootStatus) -> None:
        """Update the status of a shoot."""
        self.client.table("shoots").update(
            {"status": status.value, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(shoot_id)).execute()

    def delete_shoot(self, shoot_id: UUID) -> None:
        """Delete a shoot row."""
        self.client.table("shoots").delete().eq("id", str(shoot_id)).execute()

    def replace_executors(self, shoot_id: UUID, user_ids: list[UUID]) -> None:
        """Replace the executor rows of a shoot."""
        self.client.table("shoot_executors").delete().eq(
            "shoot_id", str(shoot_id)
        ).execute()
        if user_ids:
            self.client.table("shoot_executors").insert(
                [
                    {"shoot_id": str(shoot_id), "user_id": str(user_id)}
                    for user_id in user_ids
                ]
            ).execute()

    def replace_linked_edits(self, shoot_id: UUID, edit_ids: list[UUID]) -> None:
        """Unlink current edit projects and link the given ones."""
        self.client.table("edits").update({"shoot_id": None}).eq(
            "shoot_id", str(shoot_id)
        ).execute()
        if edit_ids:
            self.client.table("edits").update({"shoot_id": str(shoot_id)}).in_(
                "id", [str(edit_id) for edit_id in edit_ids]
            ).execute()


def _draft_payload(draft: ShootDraft) -> dict[str, object]:
    return {column: to_json(getattr(draft, column)) for column in _DRAFT_COLUMNS}


def parse_shoot_row(
    row: dict[str, object], executor_ids: list[UUID] | None = None
) -> ShootRecord:
    """Parse a shoots row into a domain model."""
    return ShootRecord(
        id=UUID(str(row["id"])),
        code=str(row["code"]),
        client_id=UUID(str(row["client_id"])),
        shoot_type_id=UUID(str(row["shoot_type_id"])),
        status=ShootStatus(row.get("status") or ShootStatus.PLANNED),
        workflow_type=WorkflowType(row.get("workflow_type") or WorkflowType.SHIFT),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        entity_id=parse_uuid(row.get("entity_id")),
        location_id=parse_uuid(row.get("location_id")),
        cluster_id=parse_uuid(row.get("cluster_id")),
        project_name=row.get("project_name"),
        remarks=row.get("remarks"),
        overall_deliverables=row.get("overall_deliverables"),
        scheduled_date=parse_date(row.get("scheduled_date")),
        reporting_time=row.get("reporting_time"),
        wrap_up_time=row.get("wrap_up_time"),
        photographer_notes=row.get("photographer_notes"),
        shoot_cost=parse_float(row.get("shoot_cost")),
        travel_cost=parse_float(row.get("travel_cost")),
        overall_cost=parse_float(row.get("overall_cost")),
        shoot_cost_status=_cost_status(row.get("shoot_cost_status")),
        travel_cost_status=_cost_status(row.get("travel_cost_status")),
        overall_cost_status=_cost_status(row.get("overall_cost_status")),
        cluster_cost_override=parse_float(row.get("cluster_cost_override")),
        dop_id=parse_uuid(row.get("dop_id")),
        executor_ids=executor_ids or [],
    )


def _cost_status(raw: object) -> CostStatus | None:
    if not raw:
        return None
    return CostStatus(str(raw))
