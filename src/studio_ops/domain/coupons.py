"""Domain models for discount coupons."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class CouponType(StrEnum):
    """How a coupon's value is applied."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CouponStatus(StrEnum):
    """Derived, never persisted, coupon state."""

    INACTIVE = "inactive"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    ACTIVE = "active"


@dataclass(frozen=True)
class CouponDraft:
    """Editable fields of a coupon."""

    code: str
    type: CouponType
    value: float
    valid_from: datetime
    description: str | None = None
    min_amount: float | None = None
    max_uses: int | None = None
    valid_until: datetime | None = None
    is_active: bool = True


@dataclass(frozen=True)
class CouponRecord:
    """Represents a persisted coupon."""

    id: UUID
    code: str
    type: CouponType
    value: float
    valid_from: datetime
    used_count: int
    is_active: bool
    created_at: datetime
    description: str | None = None
    min_amount: float | None = None
    max_uses: int | None = None
    valid_until: datetime | None = None


@dataclass(frozen=True)
class CouponUsage:
    """Usage figures shown next to a coupon."""

    used_count: int
    remaining_uses: int | None
    usage_percent: int | None
