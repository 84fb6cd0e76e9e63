"""FastAPI application factory."""

from fastapi import FastAPI

from studio_ops.api.clusters import router as clusters_router
from studio_ops.api.coupons import router as coupons_router
from studio_ops.api.dashboard import router as dashboard_router
from studio_ops.api.edits import router as edits_router
from studio_ops.api.errors import register_error_handlers
from studio_ops.api.shoots import router as shoots_router
from studio_ops.app_logging import configure_logging
from studio_ops.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    app = FastAPI(title="studio-ops")
    app.state.container = container

    register_error_handlers(app)
    app.include_router(shoots_router)
    app.include_router(edits_router)
    app.include_router(coupons_router)
    app.include_router(clusters_router)
    app.include_router(dashboard_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
