from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas import ManagerPreferencesUpdate, ManagerPreferencesResponse
from app.api.dependencies import require_manager
from app.services import manager_preferences as preferences_service

router = APIRouter(prefix="/manager-preferences", tags=["Manager Preferences"])


@router.get("", response_model=ManagerPreferencesResponse)
def get_manager_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    preferences = preferences_service.get_preferences_row(db, current_user.id)
    if not preferences:
        return ManagerPreferencesResponse(manager_id=current_user.id, selected_employee_ids=[])

    return ManagerPreferencesResponse(
        manager_id=preferences.manager_id,
        selected_employee_ids=preferences.employee_ids,
        created_at=preferences.created_at,
        updated_at=preferences.updated_at,
    )


@router.post("", response_model=ManagerPreferencesResponse)
def save_manager_preferences(
    preferences_update: ManagerPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Save which employees appear in the manager's reporting view."""
    preferences = preferences_service.save_preferences(
        db, current_user.id, preferences_update.selected_employee_ids
    )
    return ManagerPreferencesResponse(
        manager_id=preferences.manager_id,
        selected_employee_ids=preferences.employee_ids,
        created_at=preferences.created_at,
        updated_at=preferences.updated_at,
    )
