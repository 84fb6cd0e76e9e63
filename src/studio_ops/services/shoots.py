"""Shoot booking business logic."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from studio_ops.domain.errors import (
    DuplicateIdentifierError,
    InvalidInputError,
    RecordNotFoundError,
)
from studio_ops.domain.identifiers import IdentifierAvailability
from studio_ops.domain.shoots import ShootDraft, ShootRecord, ShootStatus, ShootType
from studio_ops.services.identifiers import IdentifierService, require_identifier

_logger = logging.getLogger(__name__)


class ShootRepository(Protocol):
    """Persistence interface for shoots."""

    def code_exists(self, code: str) -> bool:
        """Return whether a shoot already uses the code."""

    def get_shoot_type(self, shoot_type_id: UUID) -> ShootType | None:
        """Return a shoot type by id, if present."""

    def create_shoot(self, draft: ShootDraft, status: ShootStatus) -> ShootRecord:
        """Insert a shoot; raise DuplicateIdentifierError on a code conflict."""

    def get_shoot(self, shoot_id: UUID) -> ShootRecord | None:
        """Return a shoot by id, if present."""

    def list_shoots(self) -> list[ShootRecord]:
        """Return all shoots, newest first."""

    def update_shoot(self, shoot_id: UUID, draft: ShootDraft) -> ShootRecord:
        """Update a shoot; raise DuplicateIdentifierError on a code conflict."""

    def update_status(self, shoot_id: UUID, status: ShootStatus) -> None:
        """Update the status of a shoot."""

    def delete_shoot(self, shoot_id: UUID) -> None:
        """Delete a shoot."""

    def replace_executors(self, shoot_id: UUID, user_ids: list[UUID]) -> None:
        """Replace the team members who executed a shoot."""

    def replace_linked_edits(self, shoot_id: UUID, edit_ids: list[UUID]) -> None:
        """Unlink current edit projects and link the given ones."""


@dataclass
class ShootService:
    """Application service for shoot bookings."""

    repository: ShootRepository
    identifiers: IdentifierService

    def generate_code(self, shoot_type_id: UUID) -> str:
        """Generate a free shoot code prefixed with the shoot type code."""
        shoot_type = self.repository.get_shoot_type(shoot_type_id)
        if shoot_type is None:
            raise RecordNotFoundError("Shoot type", shoot_type_id)
        return self.identifiers.generate(shoot_type.code, self.repository.code_exists)

    def check_code(self, code: str) -> IdentifierAvailability:
        """Check whether a manually entered shoot code can be used."""
        return self.identifiers.check_availability(code, self.repository.code_exists)

    def create_shoot(self, draft: ShootDraft) -> ShootRecord:
        """Create a planned shoot with its executors and linked edits."""
        code = require_identifier(draft.code)
        if self.repository.code_exists(code):
            raise DuplicateIdentifierError(code)
        shoot = self.repository.create_shoot(
            replace(draft, code=code), status=ShootStatus.PLANNED
        )
        if draft.executor_ids:
            self.repository.replace_executors(shoot.id, draft.executor_ids)
        if draft.edit_ids:
            self.repository.replace_linked_edits(shoot.id, draft.edit_ids)
        _logger.info("Shoot created: code=%s id=%s", shoot.code, shoot.id)
        return replace(shoot, executor_ids=list(draft.executor_ids))

    def get_shoot(self, shoot_id: UUID) -> ShootRecord:
        """Return a shoot or raise RecordNotFoundError."""
        shoot = self.repository.get_shoot(shoot_id)
        if shoot is None:
            raise RecordNotFoundError("Shoot", shoot_id)
        return shoot

    def list_shoots(self) -> list[ShootRecord]:
        """Return all shoots, newest first."""
        return self.repository.list_shoots()

    def update_shoot(self, shoot_id: UUID, draft: ShootDraft) -> ShootRecord:
        """Update a shoot, re-checking the code only when it changes."""
        current = self.get_shoot(shoot_id)
        code = require_identifier(draft.code)
        if code != current.code and self.repository.code_exists(code):
            raise DuplicateIdentifierError(code)
        shoot = self.repository.update_shoot(shoot_id, replace(draft, code=code))
        self.repository.replace_executors(shoot_id, draft.executor_ids)
        self.repository.replace_linked_edits(shoot_id, draft.edit_ids)
        return replace(shoot, executor_ids=list(draft.executor_ids))

    def update_status(self, shoot_id: UUID, status: str) -> None:
        """Move a shoot to another status."""
        try:
            new_status = ShootStatus(status)
        except ValueError as exc:
            raise InvalidInputError(f"Invalid shoot status: {status}") from exc
        self.get_shoot(shoot_id)
        self.repository.update_status(shoot_id, new_status)

    def delete_shoot(self, shoot_id: UUID) -> None:
        """Delete a shoot."""
        self.get_shoot(shoot_id)
        self.repository.delete_shoot(shoot_id)
