# Import all models here for Alembic to detect them
from app.models.user import User, UserRole
from app.models.work_entry import WorkEntry, WorkEntryStatus, WorkType
from app.models.work_hour_request import WorkHourRequest, WorkHourRequestStatus
from app.models.manager_preferences import ManagerPreferences

__all__ = [
    "User",
    "UserRole",
    "WorkEntry",
    "WorkEntryStatus",
    "WorkType",
    "WorkHourRequest",
    "WorkHourRequestStatus",
    "ManagerPreferences",
]
