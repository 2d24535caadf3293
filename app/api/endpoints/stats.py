from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Union
from app.db.session import get_db
from app.models.user import User
from app.schemas import OrganizationStats, EmployeeStats, ManagerDashboardStats
from app.api.dependencies import get_current_user, require_manager
from app.services import stats as stats_service

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.get("", response_model=Union[OrganizationStats, EmployeeStats])
def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Organization totals for HR and managers, personal hours for employees."""
    return stats_service.scope_for(current_user).stats(db)


@router.get("/manager-dashboard", response_model=ManagerDashboardStats)
def get_manager_dashboard_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_manager)
):
    """Today's submission counts over employee accounts."""
    return stats_service.manager_dashboard_stats(db)
