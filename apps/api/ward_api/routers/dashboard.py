"""Dashboard router - headline statistics."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.dashboard import DashboardStats
from ward_api.services import dashboard_service

router = APIRouter(
    dependencies=[Depends(require_permission(Resource.DASHBOARD, Action.VIEW))]
)


@router.get("/stats", response_model=DashboardStats)
def get_stats(db: Session = Depends(get_db)):
    """Member and calling counts, pending LCR tasks and recent activity."""
    return dashboard_service.get_stats(db)
