"""Domain error types."""


class StudioOpsError(Exception):
    """Base class for errors reported back to callers."""


class GenerationExhaustedError(StudioOpsError):
    """Every generated identifier candidate collided with an existing record."""

    def __init__(self, prefix: str, attempts: int) -> None:
        super().__init__(
            f"Failed to generate a unique identifier for prefix {prefix!r} "
            f"after {attempts} attempts"
        )
        self.prefix = prefix
        self.attempts = attempts


class DuplicateIdentifierError(StudioOpsError):
    """An identifier is already used by another record of the same type."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Identifier {code!r} already exists")
        self.code = code


class EmptyIdentifierError(StudioOpsError):
    """A manually entered identifier was blank."""

    def __init__(self) -> None:
        super().__init__("Identifier is required")


class InvalidInputError(StudioOpsError, ValueError):
    """Input failed business validation."""


class RecordNotFoundError(StudioOpsError, LookupError):
    """A referenced record does not exist."""

    def __init__(self, entity: str, record_id: object) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class CouponUnavailableError(StudioOpsError):
    """A coupon cannot be redeemed in its current state."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Coupon cannot be redeemed: {status}")
        self.status = status
