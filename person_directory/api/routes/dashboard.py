"""
Dashboard API routes.
"""
import logging
from fastapi import APIRouter

from ...api.schemas import DashboardResponse, SearchLogResponse
from ...services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

def create_dashboard_router(dashboard_service: DashboardService) -> APIRouter:
    """Create dashboard router with dependencies."""
    router = APIRouter(prefix="/dashboard", tags=["dashboard"])

    @router.get("", response_model=DashboardResponse)
    async def get_dashboard():
        """Get record and search counts with the most recent searches."""
        summary = dashboard_service.get_summary()
        if summary.errors:
            logger.warning(f"Dashboard partially unavailable: {summary.errors}")

        return DashboardResponse(
            total_persons=summary.total_persons,
            total_searches=summary.total_searches,
            recent_searches=[SearchLogResponse.model_validate(entry) for entry in summary.recent_searches],
            status=summary.status,
            errors=summary.errors
        )

    return router
