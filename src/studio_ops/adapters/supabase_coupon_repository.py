"""Supabase repository for coupons."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from studio_ops.adapters.supabase_rows import (
    is_unique_violation,
    parse_datetime,
    parse_float,
    to_json,
)
from studio_ops.domain.coupons import CouponDraft, CouponRecord, CouponType
from studio_ops.domain.errors import DuplicateIdentifierError
from studio_ops.services.coupons import CouponRepository


@dataclass
class SupabaseCouponRepository(CouponRepository):
    """Supabase implementation for coupon persistence."""

    client: Client

    def create_coupon(self, draft: CouponDraft) -> CouponRecord:
        try:
            response = (
                self.client.table("coupons")
                .insert({**_draft_payload(draft), "used_count": 0})
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create coupon")
        return _parse_coupon_row(response.data[0])

    def get_coupon(self, coupon_id: UUID) -> CouponRecord | None:
        response = (
            self.client.table("coupons")
            .select("*")
            .eq("id", str(coupon_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_coupon_row(response.data[0])

    def list_coupons(self) -> list[CouponRecord]:
        response = (
            self.client.table("coupons")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_coupon_row(row) for row in response.data or []]

    def update_coupon(self, coupon_id: UUID, draft: CouponDraft) -> CouponRecord:
        try:
            response = (
                self.client.table("coupons")
                .update(_draft_payload(draft))
                .eq("id", str(coupon_id))
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateIdentifierError(draft.code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to update coupon")
        return _parse_coupon_row(response.data[0])

    def delete_coupon(self, coupon_id: UUID) -> None:
        self.client.table("coupons").delete().eq("id", str(coupon_id)).execute()

    def set_used_count(self, coupon_id: UUID, used_count: int) -> None:
        self.client.table("coupons").update({"used_count": used_count}).eq(
            "id", str(coupon_id)
        ).execute()


def _draft_payload(draft: CouponDraft) -> dict[str, object]:
    return {
        "code": draft.code,
        "type": to_json(draft.type),
        "value": draft.value,
        "valid_from": to_json(draft.valid_from),
        "description": draft.description,
        "min_amount": draft.min_amount,
        "max_uses": draft.max_uses,
        "valid_until": to_json(draft.valid_until),
        "is_active": draft.is_active,
    }


def _parse_coupon_row(row: dict[str, object]) -> CouponRecord:
    max_uses = row.get("max_uses")
    return CouponRecord(
        id=UUID(str(row["id"])),
        code=str(row["code"]),
        type=CouponType(row["type"]),
        value=float(row["value"]),
        valid_from=parse_datetime(row.get("valid_from")) or datetime.now(tz=UTC),
        used_count=int(row.get("used_count") or 0),
        is_active=bool(row.get("is_active", True)),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        description=row.get("description"),
        min_amount=parse_float(row.get("min_amount")),
        max_uses=int(max_uses) if max_uses is not None else None,
        valid_until=parse_datetime(row.get("valid_until")),
    )
