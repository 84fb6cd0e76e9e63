"""Team member domain models."""

from dataclasses import dataclass, field
from uuid import UUID

PHOTOGRAPHER_ROLE = "photographer"


@dataclass(frozen=True)
class TeamMember:
    """Photographer, editor or admin on the team."""

    id: UUID
    name: str
    is_active: bool
    roles: list[str] = field(default_factory=list)
    rating: float | None = None
