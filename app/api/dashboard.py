from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.schemas import DashboardStats
from app.services.analytics import dashboard_stats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(store=Depends(get_store)):
    return DashboardStats(**dashboard_stats(store))
