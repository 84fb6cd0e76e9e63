"""Cluster endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_ops.api.admin import get_container, require_admin
from studio_ops.api.errors import persistence_errors
from studio_ops.api.schemas import ClusterPayload  # noqa: TC001

router = APIRouter(
    prefix="/clusters", tags=["clusters"], dependencies=[Depends(require_admin)]
)


@router.get("")
async def list_clusters(request: Request) -> dict[str, object]:
    """Return all clusters."""
    return {"clusters": get_container(request).cluster_service.list_clusters()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_cluster(body: ClusterPayload, request: Request) -> dict[str, object]:
    """Create a cluster."""
    with persistence_errors("create cluster"):
        cluster = get_container(request).cluster_service.create_cluster(
            body.to_draft()
        )
    return {"cluster": cluster}


@router.get("/{cluster_id}")
async def cluster_detail(cluster_id: UUID, request: Request) -> dict[str, object]:
    """Return a cluster with its cost summary."""
    service = get_container(request).cluster_service
    return {
        "cluster": service.get_cluster(cluster_id),
        "costs": service.get_cost_summary(cluster_id),
    }


@router.put("/{cluster_id}")
async def update_cluster(
    cluster_id: UUID, body: ClusterPayload, request: Request
) -> dict[str, object]:
    """Replace the editable fields of a cluster."""
    with persistence_errors("update cluster"):
        cluster = get_container(request).cluster_service.update_cluster(
            cluster_id, body.to_draft()
        )
    return {"cluster": cluster}


@router.delete("/{cluster_id}")
async def delete_cluster(cluster_id: UUID, request: Request) -> dict[str, str]:
    """Delete a cluster."""
    with persistence_errors("delete cluster"):
        get_container(request).cluster_service.delete_cluster(cluster_id)
    return {"status": "ok"}
