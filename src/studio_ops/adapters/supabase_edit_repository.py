"""Supabase repository for edit projects."""

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
from studio_ops.domain.edits import EditDraft, EditRecord, EditStatus
from studio_ops.domain.errors import DuplicateIdentifierError
from studio_ops.domain.shoots import CostStatus
from studio_ops.services.edits import EditRepository

_DRAFT_COLUMNS = (
    "code",
    "shoot_id",
    "deliverables",
    "delivery_date",
    "editor_notes",
    "edit_cost",
    "edit_cost_status",
)


@dataclass
class SupabaseEditRepository(EditRepository):
    """Supabase implementation for edit project persistence."""

    client: Client

    def code_exists(self, code: str) -> bool:
        response = (
            self.client.table("edits").select("id").eq("code", code).limit(1).execute()
        )
        return bool(response.data)

    def create_edit(self, draft: EditDraft, status: EditStatus) -> EditRecord:
        payload = {**_draft_payload(draft), "status": status.value}
        try:
            response = self.client.table("edits").insert(payload).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create edit project")
        return parse_edit_row(response.data[0])

    def get_edit(self, edit_id: UUID) -> EditRecord | None:
        response = (
            self.client.table("edits")
            .select("*")
            .eq("id", str(edit_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        editors = (
            self.client.table("edit_editors")
            .select("user_id")
            .eq("edit_id", str(edit_id))
            .execute()
        )
        return parse_edit_row(
            response.data[0],
            editor_ids=[UUID(row["user_id"]) for row in editors.data or []],
        )

    def list_edits(self) -> list[EditRecord]:
        response = (
            self.client.table("edits")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_edit_row(row) for row in response.data or []]

    def list_edits_for_shoot(self, shoot_id: UUID) -> list[EditRecord]:
        response = (
            self.client.table("edits")
            .select("*")
            .eq("shoot_id", str(shoot_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_edit_row(row) for row in response.data or []]

    def update_edit(self, edit_id: UUID, draft: EditDraft) -> EditRecord:
        try:
            response = (
                self.client.table("edits")
                .update(_draft_payload(draft))
                .eq("id", str(edit_id))
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to update edit project")
        return parse_edit_row(response.data[0])

    def update_status(self, edit_id: UUID, status: EditStatus) -> None:
        self.client.table("edits").update(
            {"status": status.value, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(edit_id)).execute()

    def delete_edit(self, edit_id: UUID) -> None:
        self.client.table("edits").delete().eq("id", str(edit_id)).execute()

    def replace_editors(self, edit_id: UUID, user_ids: list[UUID]) -> None:
        self.client.table("edit_editors").delete().eq("edit_id", str(edit_id)).execute()
        if user_ids:
            self.client.table("edit_editors").insert(
                [
                    {"edit_id": str(edit_id), "user_id": str(user_id)}
                    for user_id in user_ids
                ]
            ).execute()


def _draft_payload(draft: EditDraft) -> dict[str, object]:
    return {column: to_json(getattr(draft, column)) for column in _DRAFT_COLUMNS}


def parse_edit_row(
    row: dict[str, object], editor_ids: list[UUID] | None = None
) -> EditRecord:
    """Parse an edits row into a domain model."""
    cost_status = row.get("edit_cost_status")
    return EditRecord(
        id=UUID(str(row["id"])),
        code=str(row["code"]),
        status=EditStatus(row.get("status") or EditStatus.PENDING),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        shoot_id=parse_uuid(row.get("shoot_id")),
        cluster_id=parse_uuid(row.get("cluster_id")),
        deliverables=row.get("deliverables"),
        delivery_date=parse_date(row.get("delivery_date")),
        editor_notes=row.get("editor_notes"),
        edit_cost=parse_float(row.get("edit_cost")),
        edit_cost_status=CostStatus(str(cost_status)) if cost_status else None,
        editor_ids=editor_ids or [],
    )
