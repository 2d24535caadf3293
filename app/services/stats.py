"""Read-side rollups over the work-entry ledger and the identity store.

Role-dependent behaviour lives in a ``ReportingScope`` chosen per user rather
than in conditionals scattered across routes.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.date_filters import start_of_month, start_of_week, utc_today
from app.models.user import User, UserRole
from app.models.work_entry import WorkEntry
from app.schemas import EmployeeStats, ManagerDashboardStats, OrganizationStats
from app.services.manager_preferences import get_preferences


def round_hours(value) -> float:
    return round(float(value or 0), 1)


def sum_hours(db: Session, *criteria) -> float:
    return round_hours(db.query(func.sum(WorkEntry.time_spent)).filter(*criteria).scalar())


def organization_stats(db: Session, today: Optional[date] = None) -> OrganizationStats:
    today = today or utc_today()

    total_employees = db.query(func.count(User.id)).filter(User.role == UserRole.EMPLOYEE).scalar() or 0
    total_entries = db.query(func.count(WorkEntry.id)).scalar() or 0
    total_hours = float(db.query(func.sum(WorkEntry.time_spent)).scalar() or 0)
    avg_hours = total_hours / total_entries if total_entries else 0

    # Distinct users with an entry dated today, whatever their role
    submitted_today = db.query(func.count(func.distinct(WorkEntry.user_id))).filter(
        WorkEntry.date == today
    ).scalar() or 0

    return OrganizationStats(
        total_employees=total_employees,
        total_entries=total_entries,
        total_hours=round_hours(total_hours),
        avg_hours=round_hours(avg_hours),
        submitted_today=submitted_today,
        not_submitted_today=max(total_employees - submitted_today, 0),
    )


def employee_stats(db: Session, user_id: str, today: Optional[date] = None) -> EmployeeStats:
    today = today or utc_today()
    week_start = start_of_week(today, settings.STATS_WEEK_START)
    month_start = start_of_month(today)

    return EmployeeStats(
        today_hours=sum_hours(db, WorkEntry.user_id == user_id, WorkEntry.date == today),
        week_hours=sum_hours(db, WorkEntry.user_id == user_id, WorkEntry.date >= week_start),
        month_hours=sum_hours(db, WorkEntry.user_id == user_id, WorkEntry.date >= month_start),
    )


def manager_dashboard_stats(db: Session, today: Optional[date] = None) -> ManagerDashboardStats:
    """Today's submission picture counting employee accounts only."""
    today = today or utc_today()

    total_employees = db.query(func.count(User.id)).filter(User.role == UserRole.EMPLOYEE).scalar() or 0
    submitted = db.query(func.count(func.distinct(WorkEntry.user_id))).join(
        User, WorkEntry.user_id == User.id
    ).filter(
        WorkEntry.date == today,
        User.role == UserRole.EMPLOYEE
    ).scalar() or 0

    return ManagerDashboardStats(
        total_employees=total_employees,
        submitted=submitted,
        not_submitted=max(total_employees - submitted, 0),
        total_work_hours=sum_hours(db, WorkEntry.date == today),
    )


class ReportingScope:
    """What a user sees in the reporting views."""

    def __init__(self, user: User):
        self.user = user

    def stats(self, db: Session):
        raise NotImplementedError

    def roster(self, db: Session) -> List[User]:
        """Employees whose reports are shown to this user."""
        return []


class EmployeeScope(ReportingScope):
    def stats(self, db: Session) -> EmployeeStats:
        return employee_stats(db, self.user.id)

    def roster(self, db: Session) -> List[User]:
        return [self.user]


class OrganizationScope(ReportingScope):
    def stats(self, db: Session) -> OrganizationStats:
        return organization_stats(db)

    def roster(self, db: Session) -> List[User]:
        return db.query(User).filter(
            User.role == UserRole.EMPLOYEE
        ).order_by(User.first_name, User.last_name).all()


class ManagerScope(OrganizationScope):
    def roster(self, db: Session) -> List[User]:
        employees = super().roster(db)
        selected = get_preferences(db, self.user.id)
        if not selected:
            return employees
        # Ids that no longer match an employee are dropped silently
        by_id = {employee.id: employee for employee in employees}
        return [by_id[employee_id] for employee_id in selected if employee_id in by_id]


SCOPES = {
    UserRole.EMPLOYEE: EmployeeScope,
    UserRole.HR: OrganizationScope,
    UserRole.MANAGER: ManagerScope,
}


def scope_for(user: User) -> ReportingScope:
    return SCOPES[user.role](user)
