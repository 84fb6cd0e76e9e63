"""Coupon management and derived coupon state."""

import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from studio_ops.domain.coupons import (
    CouponDraft,
    CouponRecord,
    CouponStatus,
    CouponType,
    CouponUsage,
)
from studio_ops.domain.errors import (
    CouponUnavailableError,
    InvalidInputError,
    RecordNotFoundError,
)

MAX_CODE_LENGTH = 20
MAX_PERCENTAGE = 100


class CouponRepository(Protocol):
    """Persistence interface for coupons."""

    def create_coupon(self, draft: CouponDraft) -> CouponRecord:
        """Insert a coupon and return it."""

    def get_coupon(self, coupon_id: UUID) -> CouponRecord | None:
        """Return a coupon by id, if present."""

    def list_coupons(self) -> list[CouponRecord]:
        """Return all coupons, newest first."""

    def update_coupon(self, coupon_id: UUID, draft: CouponDraft) -> CouponRecord:
        """Update a coupon and return it."""

    def delete_coupon(self, coupon_id: UUID) -> None:
        """Delete a coupon."""

    def set_used_count(self, coupon_id: UUID, used_count: int) -> None:
        """Store the number of times a coupon has been used."""


def derive_coupon_status(  # noqa: PLR0913
    is_active: bool,
    valid_from: datetime,
    valid_until: datetime | None,
    used_count: int,
    max_uses: int | None,
    now: datetime,
) -> CouponStatus:
    """Return the coupon state; the first matching rule wins."""
    if not is_active:
        return CouponStatus.INACTIVE
    if valid_until is not None and now > valid_until:
        return CouponStatus.EXPIRED
    if now < valid_from:
        return CouponStatus.NOT_YET_VALID
    if max_uses is not None and used_count >= max_uses:
        return CouponStatus.USAGE_LIMIT_REACHED
    return CouponStatus.ACTIVE


def derive_coupon_usage(used_count: int, max_uses: int | None) -> CouponUsage:
    """Return remaining uses and usage percentage; None means unlimited."""
    if max_uses is None:
        return CouponUsage(
            used_count=used_count, remaining_uses=None, usage_percent=None
        )
    percent = math.floor(used_count / max_uses * 100 + 0.5)
    return CouponUsage(
        used_count=used_count,
        remaining_uses=max(max_uses - used_count, 0),
        usage_percent=min(max(percent, 0), 100),
    )


def coupon_status(coupon: CouponRecord, now: datetime) -> CouponStatus:
    """Derive the status of a stored coupon."""
    return derive_coupon_status(
        is_active=coupon.is_active,
        valid_from=coupon.valid_from,
        valid_until=coupon.valid_until,
        used_count=coupon.used_count,
        max_uses=coupon.max_uses,
        now=now,
    )


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CouponService:
    """Application service for coupons."""

    repository: CouponRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def create_coupon(self, draft: CouponDraft) -> CouponRecord:
        """Validate and create a coupon."""
        return self.repository.create_coupon(_validate(draft))

    def update_coupon(self, coupon_id: UUID, draft: CouponDraft) -> CouponRecord:
        """Validate and update a coupon."""
        self.get_coupon(coupon_id)
        return self.repository.update_coupon(coupon_id, _validate(draft))

    def get_coupon(self, coupon_id: UUID) -> CouponRecord:
        """Return a coupon or raise RecordNotFoundError."""
        coupon = self.repository.get_coupon(coupon_id)
        if coupon is None:
            raise RecordNotFoundError("Coupon", coupon_id)
        return coupon

    def list_coupons(self) -> list[CouponRecord]:
        """Return all coupons, newest first."""
        return self.repository.list_coupons()

    def delete_coupon(self, coupon_id: UUID) -> None:
        """Delete a coupon."""
        self.get_coupon(coupon_id)
        self.repository.delete_coupon(coupon_id)

    def status_of(self, coupon: CouponRecord) -> CouponStatus:
        """Return the coupon status as of now."""
        return coupon_status(coupon, self.clock())

    def redeem(self, coupon_id: UUID) -> CouponRecord:
        """Record one use of a coupon that is currently active."""
        coupon = self.get_coupon(coupon_id)
        status = self.status_of(coupon)
        if status != CouponStatus.ACTIVE:
            raise CouponUnavailableError(status)
        used_count = coupon.used_count + 1
        self.repository.set_used_count(coupon_id, used_count)
        return replace(coupon, used_count=used_count)


def _validate(draft: CouponDraft) -> CouponDraft:
    code = draft.code.strip().upper()
    if not code:
        raise InvalidInputError("Code is required")
    if len(code) > MAX_CODE_LENGTH:
        raise InvalidInputError(f"Code must be {MAX_CODE_LENGTH} characters or less")
    if draft.value < 0:
        raise InvalidInputError("Value must be positive")
    if draft.type == CouponType.PERCENTAGE and draft.value > MAX_PERCENTAGE:
        raise InvalidInputError("Percentage value cannot exceed 100%")
    if draft.min_amount is not None and draft.min_amount < 0:
        raise InvalidInputError("Minimum amount must be positive")
    if draft.max_uses is not None and draft.max_uses < 1:
        raise InvalidInputError("Max uses must be at least 1")
    return replace(
        draft,
        code=code,
        valid_from=_as_utc(draft.valid_from),
        valid_until=_as_utc(draft.valid_until) if draft.valid_until else None,
    )


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored and compared as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
