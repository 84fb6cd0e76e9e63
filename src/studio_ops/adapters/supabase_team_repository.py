"""Supabase repository for team members."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from studio_ops.adapters.supabase_rows import parse_float
from studio_ops.domain.team import TeamMember
from studio_ops.services.team import TeamRepository


@dataclass
class SupabaseTeamRepository(TeamRepository):
    """Supabase implementation for team member reads."""

    client: Client

    def list_members_with_role(self, role: str) -> list[TeamMember]:
        response = (
            self.client.table("team_members")
            .select("id, name, is_active, roles, rating")
            .contains("roles", [role])
            .execute()
        )
        return [
            TeamMember(
                id=UUID(str(row["id"])),
                name=str(row["name"]),
                is_active=bool(row.get("is_active", True)),
                roles=list(row.get("roles") or []),
                rating=parse_float(row.get("rating")),
            )
            for row in response.data or []
        ]
