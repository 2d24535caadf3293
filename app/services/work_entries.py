"""Work-entry ledger: one entry per user per calendar day."""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager
from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.date_filters import utc_today
from app.models.user import User
from app.models.work_entry import WorkEntry, WorkEntryStatus
from app.schemas import DailyWorkReport, WorkEntryCreate, WorkEntryFilters, WorkEntryResponse
from app.services.work_hour_requests import available_approved_dates

logger = logging.getLogger(__name__)

DUPLICATE_ENTRY_MESSAGE = "A work entry already exists for this date"


def hours_of(entries: List[WorkEntry]) -> float:
    return sum(float(entry.time_spent) for entry in entries)


def is_allowed_date(db: Session, user: User, entry_date: date) -> bool:
    """Today, or a past date unlocked by an approved work hour request."""
    if entry_date == utc_today():
        return True
    return entry_date in available_approved_dates(db, user.id)


def find_entry(db: Session, user_id: str, entry_date: date) -> Optional[WorkEntry]:
    return db.query(WorkEntry).filter(
        WorkEntry.user_id == user_id,
        WorkEntry.date == entry_date
    ).first()


def create_entry(db: Session, user: User, entry_create: WorkEntryCreate) -> WorkEntry:
    if entry_create.time_spent is None or Decimal(entry_create.time_spent) <= 0:
        raise ValidationError("Time spent must be a positive number of hours")

    existing = find_entry(db, user.id, entry_create.date)

    if not is_allowed_date(db, user, entry_create.date):
        if existing:
            raise ValidationError(DUPLICATE_ENTRY_MESSAGE)
        logger.warning("Rejected work entry for %s on disallowed date %s", user.id, entry_create.date)
        raise ValidationError(
            "You can only create work entries for today's date or approved work hour request dates"
        )

    if existing:
        raise ValidationError(DUPLICATE_ENTRY_MESSAGE)

    work_entry = WorkEntry(
        user_id=user.id,
        date=entry_create.date,
        work_type=entry_create.work_type,
        description=entry_create.description,
        time_spent=entry_create.time_spent,
        status=WorkEntryStatus.PENDING,
        reviewed_by=None,
        reviewed_at=None,
    )
    db.add(work_entry)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent entry for the same date
        db.rollback()
        raise ValidationError(DUPLICATE_ENTRY_MESSAGE)
    db.refresh(work_entry)

    logger.info("Work entry %s created by %s for %s", work_entry.id, user.id, work_entry.date)
    return work_entry


def list_for_user(
    db: Session,
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[WorkEntry]:
    query = db.query(WorkEntry).filter(WorkEntry.user_id == user_id)

    if start_date:
        query = query.filter(WorkEntry.date >= start_date)
    if end_date:
        query = query.filter(WorkEntry.date <= end_date)

    query = query.order_by(WorkEntry.date.desc()).offset(skip)
    if limit:
        query = query.limit(limit)
    return query.all()


def list_all(db: Session, filters: Optional[WorkEntryFilters] = None) -> List[WorkEntry]:
    """Entries joined to their owner's profile; entries without an owner are left out."""
    filters = filters or WorkEntryFilters()
    query = db.query(WorkEntry).join(
        User, WorkEntry.user_id == User.id
    ).options(contains_eager(WorkEntry.user))

    if filters.user_id:
        query = query.filter(WorkEntry.user_id == filters.user_id)
    if filters.department:
        query = query.filter(User.department == filters.department)
    if filters.status:
        query = query.filter(WorkEntry.status == filters.status)
    if filters.start_date:
        query = query.filter(WorkEntry.date >= filters.start_date)
    if filters.end_date:
        query = query.filter(WorkEntry.date <= filters.end_date)

    return query.order_by(WorkEntry.date.desc(), WorkEntry.created_at.desc()).all()


def get_entry(db: Session, entry_id: str) -> WorkEntry:
    work_entry = db.query(WorkEntry).filter(WorkEntry.id == entry_id).first()
    if not work_entry:
        raise NotFoundError("Work entry not found")
    return work_entry


def set_status(db: Session, entry_id: str, new_status: WorkEntryStatus, reviewer: User) -> WorkEntry:
    if new_status == WorkEntryStatus.PENDING:
        raise ValidationError("Status must be approved or rejected")

    work_entry = get_entry(db, entry_id)

    if work_entry.status != WorkEntryStatus.PENDING and not settings.ALLOW_RE_REVIEW:
        raise ConflictError(f"Work entry already {work_entry.status.value}")

    work_entry.status = new_status
    work_entry.reviewed_by = reviewer.id
    work_entry.reviewed_at = datetime.utcnow()

    db.commit()
    db.refresh(work_entry)
    logger.info("Work entry %s %s by %s", entry_id, new_status.value, reviewer.id)
    return work_entry


def delete_entry(db: Session, entry_id: str) -> None:
    work_entry = get_entry(db, entry_id)
    db.delete(work_entry)
    db.commit()
    logger.info("Work entry %s deleted", entry_id)


def daily_report(db: Session, user_id: str, report_date: date) -> DailyWorkReport:
    entries = db.query(WorkEntry).filter(
        WorkEntry.user_id == user_id,
        WorkEntry.date == report_date
    ).all()

    return DailyWorkReport(
        date=report_date,
        entries=[WorkEntryResponse.model_validate(entry) for entry in entries],
        total_hours=hours_of(entries),
    )
