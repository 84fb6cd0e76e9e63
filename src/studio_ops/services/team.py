"""Team member ranking."""

from dataclasses import dataclass
from typing import Protocol

from studio_ops.domain.team import PHOTOGRAPHER_ROLE, TeamMember


class TeamRepository(Protocol):
    """Persistence interface for team members."""

    def list_members_with_role(self, role: str) -> list[TeamMember]:
        """Return team members holding a role."""


@dataclass
class TeamService:
    """Service for team leaderboards."""

    repository: TeamRepository

    def rank_photographers(self) -> list[TeamMember]:
        """Rank active photographers by rating, then by name."""
        members = self.repository.list_members_with_role(PHOTOGRAPHER_ROLE)
        active = [
            member
            for member in members
            if member.is_active and PHOTOGRAPHER_ROLE in member.roles
        ]
        return sorted(active, key=lambda member: (-(member.rating or 0), member.name))
