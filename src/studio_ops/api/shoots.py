"""Shoot booking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_ops.api.admin import get_container, require_admin
from studio_ops.api.errors import persistence_errors
from studio_ops.api.schemas import (  # noqa: TC001
    GenerateShootCodeRequest,
    ShootPayload,
    StatusUpdate,
)
from studio_ops.services.costs import shoot_total_cost

if TYPE_CHECKING:
    from studio_ops.domain.shoots import ShootRecord

router = APIRouter(
    prefix="/shoots", tags=["shoots"], dependencies=[Depends(require_admin)]
)


@router.post("/codes")
async def generate_shoot_code(
    body: GenerateShootCodeRequest, request: Request
) -> dict[str, str]:
    """Generate an unused code for a shoot of the given type."""
    service = get_container(request).shoot_service
    return {"identifier": service.generate_code(body.shoot_type_id)}


@router.get("/codes/availability")
async def shoot_code_availability(code: str, request: Request) -> dict[str, object]:
    """Check whether a manually entered shoot code is free."""
    availability = get_container(request).shoot_service.check_code(code)
    return {"availability": availability}


@router.get("")
async def list_shoots(request: Request) -> dict[str, object]:
    """Return all shoots, newest first."""
    shoots = get_container(request).shoot_service.list_shoots()
    return {"shoots": [_shoot_view(shoot) for shoot in shoots]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shoot(body: ShootPayload, request: Request) -> dict[str, object]:
    """Create a planned shoot."""
    with persistence_errors("create shoot"):
        shoot = get_container(request).shoot_service.create_shoot(body.to_draft())
    return _shoot_view(shoot)


@router.get("/{shoot_id}")
async def shoot_detail(shoot_id: UUID, request: Request) -> dict[str, object]:
    """Return a shoot with its cost and linked edit projects."""
    container = get_container(request)
    shoot = container.shoot_service.get_shoot(shoot_id)
    return {
        **_shoot_view(shoot),
        "edits": container.edit_service.list_edits(shoot_id=shoot_id),
    }


@router.put("/{shoot_id}")
async def update_shoot(
    shoot_id: UUID, body: ShootPayload, request: Request
) -> dict[str, object]:
    """Replace the editable fields of a shoot."""
    with persistence_errors("update shoot"):
        shoot = get_container(request).shoot_service.update_shoot(
            shoot_id, body.to_draft()
        )
    return _shoot_view(shoot)


@router.patch("/{shoot_id}/status")
async def update_shoot_status(
    shoot_id: UUID, body: StatusUpdate, request: Request
) -> dict[str, str]:
    """Move a shoot to another status."""
    with persistence_errors("update shoot status"):
        get_container(request).shoot_service.update_status(shoot_id, body.status)
    return {"status": "ok"}


@router.delete("/{shoot_id}")
async def delete_shoot(shoot_id: UUID, request: Request) -> dict[str, str]:
    """Delete a shoot."""
    with persistence_errors("delete shoot"):
        get_container(request).shoot_service.delete_shoot(shoot_id)
    return {"status": "ok"}


def _shoot_view(shoot: ShootRecord) -> dict[str, object]:
    return {"shoot": shoot, "total_cost": shoot_total_cost(shoot)}
