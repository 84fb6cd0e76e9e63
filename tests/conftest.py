"""Shared test fixtures."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from studio_ops.config import Settings
from studio_ops.containers import AppContainer
from studio_ops.domain.clusters import ClusterDraft, ClusterRecord
from studio_ops.domain.coupons import CouponDraft, CouponRecord
from studio_ops.domain.edits import EditDraft, EditRecord, EditStatus
from studio_ops.domain.errors import DuplicateIdentifierError
from studio_ops.domain.shoots import (
    ShootDraft,
    ShootRecord,
    ShootStatus,
    ShootType,
    WorkflowType,
)
from studio_ops.domain.stats import GrowthRow
from studio_ops.domain.team import TeamMember
from studio_ops.services.clusters import ClusterRepository, ClusterService
from studio_ops.services.coupons import CouponRepository, CouponService
from studio_ops.services.edits import EditRepository, EditService
from studio_ops.services.identifiers import IdentifierService
from studio_ops.services.shoots import ShootRepository, ShootService
from studio_ops.services.stats import StatsRepository, StatsService
from studio_ops.services.team import TeamRepository, TeamService

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


class FixedClock:
    """Millisecond clock returning queued values, then repeating the last one."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)

    def __call__(self) -> int:
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


class SequenceRandom:
    """Random source cycling through fixed values."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls = 0

    def __call__(self, _upper_bound: int) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def fixed_identifiers(*random_values: int, max_attempts: int = 10) -> IdentifierService:
    return IdentifierService(
        clock=FixedClock(1_700_000_123_456),
        random_source=SequenceRandom(*(random_values or (7,))),
        max_attempts=max_attempts,
    )


@dataclass
class InMemoryShootRepository(ShootRepository):
    """In-memory shoot repository for tests."""

    shoots: dict[UUID, ShootRecord] = field(default_factory=dict)
    shoot_types: dict[UUID, ShootType] = field(default_factory=dict)
    executors: dict[UUID, list[UUID]] = field(default_factory=dict)
    linked_edits: dict[UUID, list[UUID]] = field(default_factory=dict)
    taken_codes: set[str] = field(default_factory=set)
    exists_calls: list[str] = field(default_factory=list)
    fail_writes: bool = False

    def add_shoot_type(self, code: str, name: str = "Real Estate") -> ShootType:
        shoot_type = ShootType(id=uuid4(), name=name, code=code)
        self.shoot_types[shoot_type.id] = shoot_type
        return shoot_type

    def code_exists(self, code: str) -> bool:
        self.exists_calls.append(code)
        return code in self.taken_codes or any(
            shoot.code == code for shoot in self.shoots.values()
        )

    def get_shoot_type(self, shoot_type_id: UUID) -> ShootType | None:
        return self.shoot_types.get(shoot_type_id)

    def create_shoot(self, draft: ShootDraft, status: ShootStatus) -> ShootRecord:
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        if draft.code in self.taken_codes:
            raise DuplicateIdentifierError(draft.code)
        fields = {
            name: value
            for name, value in vars(draft).items()
            if name not in {"edit_ids", "executor_ids"}
        }
        shoot = ShootRecord(
            id=uuid4(), status=status, created_at=datetime.now(tz=UTC), **fields
        )
        self.shoots[shoot.id] = shoot
        return shoot

    def get_shoot(self, shoot_id: UUID) -> ShootRecord | None:
        shoot = self.shoots.get(shoot_id)
        if shoot is None:
            return None
        return replace(shoot, executor_ids=list(self.executors.get(shoot_id, [])))

    def list_shoots(self) -> list[ShootRecord]:
        return sorted(
            self.shoots.values(), key=lambda shoot: shoot.created_at, reverse=True
        )

    def update_shoot(self, shoot_id: UUID, draft: ShootDraft) -> ShootRecord:
        current = self.shoots[shoot_id]
        fields = {
            name: value
            for name, value in vars(draft).items()
            if name not in {"edit_ids", "executor_ids"}
        }
        shoot = replace(current, **fields)
        self.shoots[shoot_id] = shoot
        return shoot

    def update_status(self, shoot_id: UUID, status: ShootStatus) -> None:
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        self.shoots[shoot_id] = replace(self.shoots[shoot_id], status=status)

    def delete_shoot(self, shoot_id: UUID) -> None:
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        self.shoots.pop(shoot_id, None)

    def replace_executors(self, shoot_id: UUID, user_ids: list[UUID]) -> None:
        self.executors[shoot_id] = list(user_ids)

    def replace_linked_edits(self, shoot_id: UUID, edit_ids: list[UUID]) -> None:
        self.linked_edits[shoot_id] = list(edit_ids)


@dataclass
class InMemoryEditRepository(EditRepository):
    """In-memory edit project repository for tests."""

    edits: dict[UUID, EditRecord] = field(default_factory=dict)
    editors: dict[UUID, list[UUID]] = field(default_factory=dict)
    taken_codes: set[str] = field(default_factory=set)

    def code_exists(self, code: str) -> bool:
        return code in self.taken_codes or any(
            edit.code == code for edit in self.edits.values()
        )

    def create_edit(self, draft: EditDraft, status: EditStatus) -> EditRecord:
        edit = EditRecord(
            id=uuid4(),
            status=status,
            created_at=datetime.now(tz=UTC),
            **vars(draft),
        )
        self.edits[edit.id] = edit
        return edit

    def get_edit(self, edit_id: UUID) -> EditRecord | None:
        return self.edits.get(edit_id)

    def list_edits(self) -> list[EditRecord]:
        return sorted(
            self.edits.values(), key=lambda edit: edit.created_at, reverse=True
        )

    def list_edits_for_shoot(self, shoot_id: UUID) -> list[EditRecord]:
        return [edit for edit in self.list_edits() if edit.shoot_id == shoot_id]

    def update_edit(self, edit_id: UUID, draft: EditDraft) -> EditRecord:
        edit = replace(self.edits[edit_id], **vars(draft))
        self.edits[edit_id] = edit
        return edit

    def update_status(self, edit_id: UUID, status: EditStatus) -> None:
        self.edits[edit_id] = replace(self.edits[edit_id], status=status)

    def delete_edit(self, edit_id: UUID) -> None:
        self.edits.pop(edit_id, None)

    def replace_editors(self, edit_id: UUID, user_ids: list[UUID]) -> None:
        self.editors[edit_id] = list(user_ids)


@dataclass
class InMemoryCouponRepository(CouponRepository):
    """In-memory coupon repository for tests."""

    coupons: dict[UUID, CouponRecord] = field(default_factory=dict)

    def create_coupon(self, draft: CouponDraft) -> CouponRecord:
        coupon = CouponRecord(
            id=uuid4(), used_count=0, created_at=datetime.now(tz=UTC), **vars(draft)
        )
        self.coupons[coupon.id] = coupon
        return coupon

    def get_coupon(self, coupon_id: UUID) -> CouponRecord | None:
        return self.coupons.get(coupon_id)

    def list_coupons(self) -> list[CouponRecord]:
        return list(self.coupons.values())

    def update_coupon(self, coupon_id: UUID, draft: CouponDraft) -> CouponRecord:
        coupon = replace(self.coupons[coupon_id], **vars(draft))
        self.coupons[coupon_id] = coupon
        return coupon

    def delete_coupon(self, coupon_id: UUID) -> None:
        self.coupons.pop(coupon_id, None)

    def set_used_count(self, coupon_id: UUID, used_count: int) -> None:
        coupon = replace(self.coupons[coupon_id], used_count=used_count)
        self.coupons[coupon_id] = coupon


@dataclass
class InMemoryClusterRepository(ClusterRepository):
    """In-memory cluster repository for tests."""

    clusters: dict[UUID, ClusterRecord] = field(default_factory=dict)
    shoots: list[ShootRecord] = field(default_factory=list)
    edits: list[EditRecord] = field(default_factory=list)

    def create_cluster(self, draft: ClusterDraft) -> ClusterRecord:
        cluster = ClusterRecord(
            id=uuid4(), created_at=datetime.now(tz=UTC), **vars(draft)
        )
        self.clusters[cluster.id] = cluster
        return cluster

    def get_cluster(self, cluster_id: UUID) -> ClusterRecord | None:
        return self.clusters.get(cluster_id)

    def list_clusters(self) -> list[ClusterRecord]:
        return list(self.clusters.values())

    def update_cluster(self, cluster_id: UUID, draft: ClusterDraft) -> ClusterRecord:
        cluster = replace(self.clusters[cluster_id], **vars(draft))
        self.clusters[cluster_id] = cluster
        return cluster

    def delete_cluster(self, cluster_id: UUID) -> None:
        self.clusters.pop(cluster_id, None)

    def list_cluster_shoots(self, cluster_id: UUID) -> list[ShootRecord]:
        return [shoot for shoot in self.shoots if shoot.cluster_id == cluster_id]

    def list_cluster_edits(self, cluster_id: UUID) -> list[EditRecord]:
        return [edit for edit in self.edits if edit.cluster_id == cluster_id]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory dashboard repository for tests."""

    rows: list[GrowthRow] = field(default_factory=list)
    shoots: list[ShootRecord] = field(default_factory=list)

    def list_growth_rows(self) -> list[GrowthRow]:
        return list(self.rows)

    def list_shoots_with_status(
        self, statuses: Iterable[ShootStatus], limit: int | None
    ) -> list[ShootRecord]:
        wanted = set(statuses)
        matches = sorted(
            (shoot for shoot in self.shoots if shoot.status in wanted),
            key=lambda shoot: shoot.created_at,
            reverse=True,
        )
        return matches if limit is None else matches[:limit]


@dataclass
class InMemoryTeamRepository(TeamRepository):
    """In-memory team repository for tests."""

    members: list[TeamMember] = field(default_factory=list)

    def list_members_with_role(self, role: str) -> list[TeamMember]:
        return [member for member in self.members if role in member.roles]


def make_shoot(**overrides: object) -> ShootRecord:
    values: dict[str, object] = {
        "id": uuid4(),
        "code": "RE-123456-001",
        "client_id": uuid4(),
        "shoot_type_id": uuid4(),
        "status": ShootStatus.PLANNED,
        "workflow_type": WorkflowType.SHIFT,
        "created_at": NOW,
    }
    values.update(overrides)
    return ShootRecord(**values)  # type: ignore[arg-type]


def make_edit(**overrides: object) -> EditRecord:
    values: dict[str, object] = {
        "id": uuid4(),
        "code": "EDIT-123456-001",
        "status": EditStatus.PENDING,
        "created_at": NOW,
    }
    values.update(overrides)
    return EditRecord(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    identifiers = fixed_identifiers(7)
    return AppContainer(
        settings=settings,
        shoot_service=ShootService(InMemoryShootRepository(), identifiers),
        edit_service=EditService(InMemoryEditRepository(), identifiers),
        coupon_service=CouponService(InMemoryCouponRepository(), clock=lambda: NOW),
        cluster_service=ClusterService(InMemoryClusterRepository()),
        stats_service=StatsService(InMemoryStatsRepository(), clock=lambda: NOW),
        team_service=TeamService(InMemoryTeamRepository()),
    )
