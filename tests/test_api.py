"""Tests for the HTTP API."""

from datetime import timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from studio_ops.api.app import create_app
from studio_ops.domain.shoots import ShootStatus
from studio_ops.domain.stats import GrowthRow
from studio_ops.domain.team import TeamMember
from tests.conftest import (
    NOW,
    InMemoryShootRepository,
    InMemoryStatsRepository,
    InMemoryTeamRepository,
    make_shoot,
)

HEADERS = {"X-Admin-Token": "admin-token"}


def _shoot_repo(container) -> InMemoryShootRepository:  # type: ignore[no-untyped-def]
    repo = container.shoot_service.repository
    assert isinstance(repo, InMemoryShootRepository)
    return repo


def _shoot_body(code: str, **overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "code": code,
        "client_id": str(uuid4()),
        "shoot_type_id": str(uuid4()),
    }
    body.update(overrides)
    return body


def test_health_is_public(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_routes_require_admin_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/shoots").status_code == 401
    assert client.get("/shoots", headers={"X-Admin-Token": "wrong"}).status_code == 401


def test_generate_shoot_code(container) -> None:
    shoot_type = _shoot_repo(container).add_shoot_type("RE")
    client = TestClient(create_app(container))

    response = client.post(
        "/shoots/codes", json={"shoot_type_id": str(shoot_type.id)}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json() == {"identifier": "RE-123456-007"}


def test_generate_shoot_code_exhausted_returns_503(container) -> None:
    repo = _shoot_repo(container)
    shoot_type = repo.add_shoot_type("RE")
    repo.taken_codes.add("RE-123456-007")
    client = TestClient(create_app(container))

    response = client.post(
        "/shoots/codes", json={"shoot_type_id": str(shoot_type.id)}, headers=HEADERS
    )

    assert response.status_code == 503
    assert response.json()["error"] == "generation_exhausted"


def test_generate_shoot_code_for_unknown_type_returns_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/shoots/codes", json={"shoot_type_id": str(uuid4())}, headers=HEADERS
    )

    assert response.status_code == 404


def test_code_availability(container) -> None:
    _shoot_repo(container).taken_codes.add("RE-1")
    client = TestClient(create_app(container))

    taken = client.get(
        "/shoots/codes/availability", params={"code": "RE-1"}, headers=HEADERS
    )
    blank = client.get(
        "/shoots/codes/availability", params={"code": "  "}, headers=HEADERS
    )

    assert taken.json()["availability"]["reason"] == "duplicate_identifier"
    assert blank.json()["availability"]["reason"] == "empty_identifier"


def test_create_shoot_and_fetch_detail(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/shoots",
        json=_shoot_body("RE-1", shoot_cost=1000, travel_cost=150),
        headers=HEADERS,
    )
    shoot_id = created.json()["shoot"]["id"]
    detail = client.get(f"/shoots/{shoot_id}", headers=HEADERS)

    assert created.status_code == 201
    assert created.json()["shoot"]["status"] == "planned"
    assert detail.status_code == 200
    assert detail.json()["total_cost"] == 1150
    assert detail.json()["edits"] == []


def test_create_shoot_duplicate_returns_409(container) -> None:
    client = TestClient(create_app(container))
    client.post("/shoots", json=_shoot_body("RE-1"), headers=HEADERS)

    response = client.post("/shoots", json=_shoot_body("RE-1"), headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["error"] == "duplicate_identifier"


def test_create_shoot_blank_code_returns_422(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/shoots", json=_shoot_body("   "), headers=HEADERS)

    assert response.status_code == 422
    assert response.json()["error"] == "empty_identifier"


def test_create_shoot_rejects_negative_cost(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/shoots", json=_shoot_body("RE-1", shoot_cost=-5), headers=HEADERS
    )

    assert response.status_code == 422


def test_create_shoot_storage_failure_returns_500(container) -> None:
    _shoot_repo(container).fail_writes = True
    client = TestClient(create_app(container))

    response = client.post("/shoots", json=_shoot_body("RE-1"), headers=HEADERS)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to create shoot"


def test_status_and_delete_storage_failures_return_500(container) -> None:
    client = TestClient(create_app(container))
    created = client.post("/shoots", json=_shoot_body("RE-1"), headers=HEADERS)
    shoot_id = created.json()["shoot"]["id"]
    _shoot_repo(container).fail_writes = True

    status_response = client.patch(
        f"/shoots/{shoot_id}/status", json={"status": "editing"}, headers=HEADERS
    )
    delete_response = client.delete(f"/shoots/{shoot_id}", headers=HEADERS)

    assert status_response.status_code == 500
    assert status_response.json()["detail"] == "Failed to update shoot status"
    assert delete_response.status_code == 500
    assert delete_response.json()["detail"] == "Failed to delete shoot"


def test_update_shoot_status(container) -> None:
    client = TestClient(create_app(container))
    created = client.post("/shoots", json=_shoot_body("RE-1"), headers=HEADERS)
    shoot_id = created.json()["shoot"]["id"]

    ok = client.patch(
        f"/shoots/{shoot_id}/status", json={"status": "editing"}, headers=HEADERS
    )
    bad = client.patch(
        f"/shoots/{shoot_id}/status", json={"status": "archived"}, headers=HEADERS
    )

    assert ok.status_code == 200
    assert bad.status_code == 422
    assert bad.json()["error"] == "invalid_input"


def test_missing_shoot_returns_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/shoots/{uuid4()}", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_edit_code_generation(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/edits/codes", headers=HEADERS)

    assert response.json() == {"identifier": "EDIT-123456-007"}


def test_coupon_lifecycle(container) -> None:
    client = TestClient(create_app(container))
    body = {
        "code": "welcome",
        "type": "fixed",
        "value": 250,
        "valid_from": (NOW - timedelta(days=1)).isoformat(),
        "max_uses": 1,
    }

    created = client.post("/coupons", json=body, headers=HEADERS)
    coupon_id = created.json()["coupon"]["id"]
    redeemed = client.post(f"/coupons/{coupon_id}/redeem", headers=HEADERS)
    again = client.post(f"/coupons/{coupon_id}/redeem", headers=HEADERS)

    assert created.status_code == 201
    assert created.json()["coupon"]["code"] == "WELCOME"
    assert created.json()["status"] == "active"
    assert redeemed.json()["usage"] == {
        "used_count": 1,
        "remaining_uses": 0,
        "usage_percent": 100,
    }
    assert redeemed.json()["status"] == "usage_limit_reached"
    assert again.status_code == 409
    assert again.json()["error"] == "coupon_unavailable"


def test_coupon_validation_returns_422(container) -> None:
    client = TestClient(create_app(container))
    body = {
        "code": "big",
        "type": "percentage",
        "value": 150,
        "valid_from": NOW.isoformat(),
    }

    response = client.post("/coupons", json=body, headers=HEADERS)

    assert response.status_code == 422
    assert response.json()["detail"] == "Percentage value cannot exceed 100%"


def test_cluster_detail_includes_costs(container) -> None:
    client = TestClient(create_app(container))
    created = client.post(
        "/clusters", json={"name": "Wedding week", "total_cost": 900}, headers=HEADERS
    )
    cluster_id = created.json()["cluster"]["id"]

    detail = client.get(f"/clusters/{cluster_id}", headers=HEADERS)

    assert detail.json()["costs"]["display_total"] == 900
    assert detail.json()["costs"]["is_override"] is True


def test_dashboard_endpoints(container) -> None:
    stats_repo = container.stats_service.repository
    assert isinstance(stats_repo, InMemoryStatsRepository)
    stats_repo.rows = [
        GrowthRow(
            shoot_id=uuid4(),
            created_at=NOW,
            status="planned",
            city="Pune",
            client_name="Acme",
            scheduled_date=NOW.date(),
        )
    ]
    stats_repo.shoots = [make_shoot(status=ShootStatus.BLOCKED)]
    team_repo = container.team_service.repository
    assert isinstance(team_repo, InMemoryTeamRepository)
    team_repo.members = [
        TeamMember(
            id=uuid4(), name="Meera", is_active=True, roles=["photographer"], rating=5
        )
    ]
    client = TestClient(create_app(container))

    summary = client.get("/dashboard", headers=HEADERS).json()
    growth = client.get("/dashboard/growth", headers=HEADERS).json()
    metrics = client.get("/dashboard/metrics", headers=HEADERS).json()
    ranking = client.get("/dashboard/ranking", headers=HEADERS).json()

    assert summary["counts"]["total"] == 1
    assert len(summary["issue_shoots"]) == 1
    assert growth["months"][0]["label"] == "Jun 2024"
    assert growth["cities"]["top"][0]["name"] == "Pune"
    assert metrics["metrics"]["scheduled_today"] == 1
    assert ranking["photographers"][0]["name"] == "Meera"
