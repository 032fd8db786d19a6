"""
Dashboard endpoint: counters for the backoffice home page.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.services.domain import DashboardService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import DashboardStats


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DashboardStats:
    """{total, active, deleted} per entity kind, plus {unread, read} for contacts."""
    return DashboardService(db).get_stats()
