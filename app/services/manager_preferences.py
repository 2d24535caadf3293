"""Per-manager selection of employees shown in the reporting view."""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.manager_preferences import ManagerPreferences

logger = logging.getLogger(__name__)


def get_preferences_row(db: Session, manager_id: str) -> Optional[ManagerPreferences]:
    return db.query(ManagerPreferences).filter(ManagerPreferences.manager_id == manager_id).first()


def get_preferences(db: Session, manager_id: str) -> List[str]:
    preferences = get_preferences_row(db, manager_id)
    return preferences.employee_ids if preferences else []


def save_preferences(db: Session, manager_id: str, employee_ids: List[str]) -> ManagerPreferences:
    """Upsert the manager's selection. Ids are stored as given."""
    preferences = get_preferences_row(db, manager_id)

    if preferences:
        preferences.employee_ids = employee_ids
        preferences.updated_at = datetime.utcnow()
    else:
        preferences = ManagerPreferences(manager_id=manager_id)
        preferences.employee_ids = employee_ids
        db.add(preferences)

    db.commit()
    db.refresh(preferences)
    logger.info("Saved reporting preferences for manager %s (%d employees)", manager_id, len(employee_ids))
    return preferences
