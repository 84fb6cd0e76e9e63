"""Domain models for human-readable record identifiers."""

from dataclasses import dataclass
from enum import StrEnum


class UnavailableReason(StrEnum):
    """Why a manually entered identifier cannot be used."""

    EMPTY_IDENTIFIER = "empty_identifier"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"


@dataclass(frozen=True)
class IdentifierAvailability:
    """Result of checking a manually entered identifier."""

    code: str
    available: bool
    reason: UnavailableReason | None = None
