"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from studio_ops.adapters.supabase_cluster_repository import SupabaseClusterRepository
from studio_ops.adapters.supabase_coupon_repository import SupabaseCouponRepository
from studio_ops.adapters.supabase_edit_repository import SupabaseEditRepository
from studio_ops.adapters.supabase_shoot_repository import SupabaseShootRepository
from studio_ops.adapters.supabase_stats_repository import SupabaseStatsRepository
from studio_ops.adapters.supabase_team_repository import SupabaseTeamRepository
from studio_ops.config import Settings
from studio_ops.services.clusters import ClusterService
from studio_ops.services.coupons import CouponService
from studio_ops.services.edits import EditService
from studio_ops.services.identifiers import IdentifierService
from studio_ops.services.shoots import ShootService
from studio_ops.services.stats import StatsService
from studio_ops.services.team import TeamService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    shoot_service: ShootService
    edit_service: EditService
    coupon_service: CouponService
    cluster_service: ClusterService
    stats_service: StatsService
    team_service: TeamService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    identifiers = IdentifierService(
        max_attempts=resolved_settings.identifier_max_attempts
    )
    stats_service = StatsService(
        SupabaseStatsRepository(supabase_client),
        month_window=resolved_settings.growth_month_window,
        category_limit=resolved_settings.growth_category_limit,
        list_limit=resolved_settings.dashboard_list_limit,
    )
    return AppContainer(
        settings=resolved_settings,
        shoot_service=ShootService(
            SupabaseShootRepository(supabase_client), identifiers
        ),
        edit_service=EditService(SupabaseEditRepository(supabase_client), identifiers),
        coupon_service=CouponService(SupabaseCouponRepository(supabase_client)),
        cluster_service=ClusterService(SupabaseClusterRepository(supabase_client)),
        stats_service=stats_service,
        team_service=TeamService(SupabaseTeamRepository(supabase_client)),
    )
