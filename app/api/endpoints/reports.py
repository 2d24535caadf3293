from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas import UserResponse
from app.api.dependencies import require_reviewer
from app.services import stats as stats_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/employees", response_model=List[UserResponse])
def list_report_employees(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reviewer)
):
    """Employees shown in the caller's reporting view.

    Managers get their saved selection (or everyone when nothing is saved);
    HR always gets every employee.
    """
    return stats_service.scope_for(current_user).roster(db)
