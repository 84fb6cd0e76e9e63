"""Coupon endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_ops.api.admin import get_container, require_admin
from studio_ops.api.errors import persistence_errors
from studio_ops.api.schemas import CouponPayload  # noqa: TC001
from studio_ops.services.coupons import derive_coupon_usage

if TYPE_CHECKING:
    from studio_ops.domain.coupons import CouponRecord
    from studio_ops.services.coupons import CouponService

router = APIRouter(
    prefix="/coupons", tags=["coupons"], dependencies=[Depends(require_admin)]
)


@router.get("")
async def list_coupons(request: Request) -> dict[str, object]:
    """Return all coupons with their current status."""
    service = get_container(request).coupon_service
    return {
        "coupons": [_coupon_view(service, coupon) for coupon in service.list_coupons()]
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_coupon(body: CouponPayload, request: Request) -> dict[str, object]:
    """Create a coupon."""
    service = get_container(request).coupon_service
    with persistence_errors("create coupon"):
        coupon = service.create_coupon(body.to_draft())
    return _coupon_view(service, coupon)


@router.get("/{coupon_id}")
async def coupon_detail(coupon_id: UUID, request: Request) -> dict[str, object]:
    """Return a coupon with its status and usage."""
    service = get_container(request).coupon_service
    return _coupon_view(service, service.get_coupon(coupon_id))


@router.put("/{coupon_id}")
async def update_coupon(
    coupon_id: UUID, body: CouponPayload, request: Request
) -> dict[str, object]:
    """Replace the editable fields of a coupon."""
    service = get_container(request).coupon_service
    with persistence_errors("update coupon"):
        coupon = service.update_coupon(coupon_id, body.to_draft())
    return _coupon_view(service, coupon)


@router.post("/{coupon_id}/redeem")
async def redeem_coupon(coupon_id: UUID, request: Request) -> dict[str, object]:
    """Record one use of an active coupon."""
    service = get_container(request).coupon_service
    with persistence_errors("redeem coupon"):
        coupon = service.redeem(coupon_id)
    return _coupon_view(service, coupon)


@router.delete("/{coupon_id}")
async def delete_coupon(coupon_id: UUID, request: Request) -> dict[str, str]:
    """Delete a coupon."""
    with persistence_errors("delete coupon"):
        get_container(request).coupon_service.delete_coupon(coupon_id)
    return {"status": "ok"}


def _coupon_view(service: CouponService, coupon: CouponRecord) -> dict[str, object]:
    return {
        "coupon": coupon,
        "status": service.status_of(coupon),
        "usage": derive_coupon_usage(coupon.used_count, coupon.max_uses),
    }
