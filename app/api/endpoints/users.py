from datetime import date
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User, UserRole
from app.schemas import UserCreate, UserUpdate, UserResponse, DailyWorkReport, MessageResponse
from app.api.dependencies import get_current_user, require_manager, require_reviewer
from app.core.exceptions import AccessDenied
from app.services import users as user_service
from app.services import work_entries as work_entry_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_reviewer)
):
    """List all users (HR and managers)."""
    return user_service.list_users(db, role)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_create: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_manager)
):
    """Create a new user (manager only)."""
    return user_service.create_user(db, user_create)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_reviewer)
):
    return user_service.get_user_or_404(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_manager)
):
    """Update a user (manager only). Passwords are not changed here."""
    return user_service.update_user(db, user_id, user_update)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Delete a user (manager only)."""
    user_service.delete_user(db, user_id, current_user)
    return {"message": "User deleted successfully"}


@router.get("/{user_id}/daily-report/{report_date}", response_model=DailyWorkReport)
def get_daily_report(
    user_id: str,
    report_date: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Entries and total hours of one user for one day."""
    if current_user.id != user_id and not current_user.is_reviewer:
        raise AccessDenied("Access denied")
    return work_entry_service.daily_report(db, user_id, report_date)
