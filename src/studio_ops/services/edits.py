"""Edit project business logic."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from studio_ops.domain.edits import EDIT_PREFIX, EditDraft, EditRecord, EditStatus
from studio_ops.domain.errors import (
    DuplicateIdentifierError,
    InvalidInputError,
    RecordNotFoundError,
)
from studio_ops.domain.identifiers import IdentifierAvailability
from studio_ops.services.identifiers import IdentifierService, require_identifier

_logger = logging.getLogger(__name__)


class EditRepository(Protocol):
    """Persistence interface for edit projects."""

    def code_exists(self, code: str) -> bool:
        """Return whether an edit project already uses the code."""

    def create_edit(self, draft: EditDraft, status: EditStatus) -> EditRecord:
        """Insert an edit; raise DuplicateIdentifierError on a code conflict."""

    def get_edit(self, edit_id: UUID) -> EditRecord | None:
        """Return an edit project by id, if present."""

    def list_edits(self) -> list[EditRecord]:
        """Return all edit projects, newest first."""

    def list_edits_for_shoot(self, shoot_id: UUID) -> list[EditRecord]:
        """Return edit projects linked to a shoot, newest first."""

    def update_edit(self, edit_id: UUID, draft: EditDraft) -> EditRecord:
        """Update an edit; raise DuplicateIdentifierError on a code conflict."""

    def update_status(self, edit_id: UUID, status: EditStatus) -> None:
        """Update the status of an edit project."""

    def delete_edit(self, edit_id: UUID) -> None:
        """Delete an edit project."""

    def replace_editors(self, edit_id: UUID, user_ids: list[UUID]) -> None:
        """Replace the editors assigned to an edit project."""


@dataclass
class EditService:
    """Application service for edit projects."""

    repository: EditRepository
    identifiers: IdentifierService

    def generate_code(self) -> str:
        """Generate a free edit code."""
        return self.identifiers.generate(EDIT_PREFIX, self.repository.code_exists)

    def check_code(self, code: str) -> IdentifierAvailability:
        """Check whether a manually entered edit code can be used."""
        return self.identifiers.check_availability(code, self.repository.code_exists)

    def create_edit(self, draft: EditDraft) -> EditRecord:
        """Create a pending edit project with its editors."""
        code = require_identifier(draft.code)
        if self.repository.code_exists(code):
            raise DuplicateIdentifierError(code)
        edit = self.repository.create_edit(
            replace(draft, code=code), status=EditStatus.PENDING
        )
        if draft.editor_ids:
            self.repository.replace_editors(edit.id, draft.editor_ids)
        _logger.info("Edit created: code=%s id=%s", edit.code, edit.id)
        return replace(edit, editor_ids=list(draft.editor_ids))

    def get_edit(self, edit_id: UUID) -> EditRecord:
        """Return an edit project or raise RecordNotFoundError."""
        edit = self.repository.get_edit(edit_id)
        if edit is None:
            raise RecordNotFoundError("Edit", edit_id)
        return edit

    def list_edits(self, shoot_id: UUID | None = None) -> list[EditRecord]:
        """Return edit projects, optionally only those of one shoot."""
        if shoot_id is not None:
            return self.repository.list_edits_for_shoot(shoot_id)
        return self.repository.list_edits()

    def update_edit(self, edit_id: UUID, draft: EditDraft) -> EditRecord:
        """Update an edit project, re-checking the code only when it changes."""
        current = self.get_edit(edit_id)
        code = require_identifier(draft.code)
        if code != current.code and self.repository.code_exists(code):
            raise DuplicateIdentifierError(code)
        edit = self.repository.update_edit(edit_id, replace(draft, code=code))
        self.repository.replace_editors(edit_id, draft.editor_ids)
        return replace(edit, editor_ids=list(draft.editor_ids))

    def update_status(self, edit_id: UUID, status: str) -> None:
        """Move an edit project to another status."""
        try:
            new_status = EditStatus(status)
        except ValueError as exc:
            raise InvalidInputError(f"Invalid edit status: {status}") from exc
        self.get_edit(edit_id)
        self.repository.update_status(edit_id, new_status)

    def delete_edit(self, edit_id: UUID) -> None:
        """Delete an edit project."""
        self.get_edit(edit_id)
        self.repository.delete_edit(edit_id)
