"""Edit project endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_ops.api.admin import get_container, require_admin
from studio_ops.api.errors import persistence_errors
from studio_ops.api.schemas import EditPayload, StatusUpdate  # noqa: TC001
from studio_ops.services.costs import edit_total_cost

router = APIRouter(
    prefix="/edits", tags=["edits"], dependencies=[Depends(require_admin)]
)


@router.post("/codes")
async def generate_edit_code(request: Request) -> dict[str, str]:
    """Generate an unused edit project code."""
    return {"identifier": get_container(request).edit_service.generate_code()}


@router.get("/codes/availability")
async def edit_code_availability(code: str, request: Request) -> dict[str, object]:
    """Check whether a manually entered edit code is free."""
    return {"availability": get_container(request).edit_service.check_code(code)}


@router.get("")
async def list_edits(
    request: Request, shoot_id: UUID | None = None
) -> dict[str, object]:
    """Return edit projects, optionally only those linked to a shoot."""
    edits = get_container(request).edit_service.list_edits(shoot_id=shoot_id)
    return {"edits": edits}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_edit(body: EditPayload, request: Request) -> dict[str, object]:
    """Create a pending edit project."""
    with persistence_errors("create edit project"):
        edit = get_container(request).edit_service.create_edit(body.to_draft())
    return {"edit": edit, "total_cost": edit_total_cost(edit)}


@router.get("/{edit_id}")
async def edit_detail(edit_id: UUID, request: Request) -> dict[str, object]:
    """Return an edit project with its cost."""
    edit = get_container(request).edit_service.get_edit(edit_id)
    return {"edit": edit, "total_cost": edit_total_cost(edit)}


@router.put("/{edit_id}")
async def update_edit(
    edit_id: UUID, body: EditPayload, request: Request
) -> dict[str, object]:
    """Replace the editable fields of an edit project."""
    with persistence_errors("update edit project"):
        edit = get_container(request).edit_service.update_edit(
            edit_id, body.to_draft()
        )
    return {"edit": edit, "total_cost": edit_total_cost(edit)}


@router.patch("/{edit_id}/status")
async def update_edit_status(
    edit_id: UUID, body: StatusUpdate, request: Request
) -> dict[str, str]:
    """Move an edit project to another status."""
    with persistence_errors("update edit project status"):
        get_container(request).edit_service.update_status(edit_id, body.status)
    return {"status": "ok"}


@router.delete("/{edit_id}")
async def delete_edit(edit_id: UUID, request: Request) -> dict[str, str]:
    """Delete an edit project."""
    with persistence_errors("delete edit project"):
        get_container(request).edit_service.delete_edit(edit_id)
    return {"status": "ok"}
