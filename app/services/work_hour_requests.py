"""Work-hour requests: employees ask to unlock a missed past date for late entry.

A request moves ``pending -> approved`` or ``pending -> rejected``. An approved
request's date stays available until the employee files a work entry for it.
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager, joinedload
from app.core.config import settings
from app.core.exceptions import AccessDenied, ConflictError, NotFoundError, ValidationError
from app.core.date_filters import utc_today
from app.models.user import User, UserRole
from app.models.work_entry import WorkEntry
from app.models.work_hour_request import WorkHourRequest, WorkHourRequestStatus
from app.schemas import WorkHourRequestCreate

logger = logging.getLogger(__name__)

DUPLICATE_PENDING_MESSAGE = "A request for this date is already pending"


def find_pending(db: Session, employee_id: str, requested_date: date) -> Optional[WorkHourRequest]:
    return db.query(WorkHourRequest).filter(
        WorkHourRequest.employee_id == employee_id,
        WorkHourRequest.requested_date == requested_date,
        WorkHourRequest.status == WorkHourRequestStatus.PENDING
    ).first()


def create_request(db: Session, employee: User, request_create: WorkHourRequestCreate) -> WorkHourRequest:
    """Submit a request for a past date; only one pending request per date."""
    if request_create.requested_date >= utc_today():
        raise ValidationError("Can only request work hours for past dates")

    duplicate = find_pending(db, employee.id, request_create.requested_date)
    if duplicate:
        raise ValidationError(DUPLICATE_PENDING_MESSAGE)

    work_hour_request = WorkHourRequest(
        employee_id=employee.id,
        requested_date=request_create.requested_date,
        reason=request_create.reason,
        status=WorkHourRequestStatus.PENDING,
    )
    db.add(work_hour_request)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent request for the same date
        db.rollback()
        raise ValidationError(DUPLICATE_PENDING_MESSAGE)
    db.refresh(work_hour_request)

    logger.info(
        "Work hour request %s created by %s for %s",
        work_hour_request.id, employee.id, work_hour_request.requested_date
    )
    return work_hour_request


def list_mine(db: Session, employee_id: str) -> List[WorkHourRequest]:
    return db.query(WorkHourRequest).options(
        joinedload(WorkHourRequest.employee),
        joinedload(WorkHourRequest.manager)
    ).filter(
        WorkHourRequest.employee_id == employee_id
    ).order_by(WorkHourRequest.requested_at.desc()).all()


def list_requests(db: Session, status: Optional[WorkHourRequestStatus] = WorkHourRequestStatus.PENDING) -> List[WorkHourRequest]:
    """Requests joined to the requester's profile, newest first.

    Not scoped by team: every manager sees every request.
    """
    query = db.query(WorkHourRequest).join(
        User, WorkHourRequest.employee_id == User.id
    ).options(
        contains_eager(WorkHourRequest.employee),
        joinedload(WorkHourRequest.manager)
    )
    if status:
        query = query.filter(WorkHourRequest.status == status)
    return query.order_by(WorkHourRequest.requested_at.desc()).all()


def list_pending(db: Session) -> List[WorkHourRequest]:
    return list_requests(db, WorkHourRequestStatus.PENDING)


def _get_or_404(db: Session, request_id: str) -> WorkHourRequest:
    work_hour_request = db.query(WorkHourRequest).filter(WorkHourRequest.id == request_id).first()
    if not work_hour_request:
        raise NotFoundError("Work hour request not found")
    return work_hour_request


def get_request(db: Session, request_id: str, requester: User) -> WorkHourRequest:
    work_hour_request = _get_or_404(db, request_id)
    if requester.role == UserRole.EMPLOYEE and work_hour_request.employee_id != requester.id:
        raise AccessDenied("Access denied")
    return work_hour_request


def review_request(
    db: Session,
    request_id: str,
    decision: WorkHourRequestStatus,
    manager: User,
    comments: Optional[str] = None,
) -> WorkHourRequest:
    """Approve or reject a request. Comments are recorded only when given."""
    if decision == WorkHourRequestStatus.PENDING:
        raise ValidationError("Decision must be approved or rejected")

    work_hour_request = _get_or_404(db, request_id)

    if work_hour_request.status != WorkHourRequestStatus.PENDING and not settings.ALLOW_RE_REVIEW:
        raise ConflictError(f"Work hour request already {work_hour_request.status.value}")

    work_hour_request.status = decision
    work_hour_request.manager_id = manager.id
    work_hour_request.reviewed_at = datetime.utcnow()
    if comments:
        work_hour_request.manager_comments = comments

    db.commit()
    db.refresh(work_hour_request)
    logger.info("Work hour request %s %s by %s", request_id, decision.value, manager.id)
    return work_hour_request


def delete_request(db: Session, request_id: str, requester: User) -> None:
    """Withdraw a request; only its owner may, and only while it is pending."""
    work_hour_request = _get_or_404(db, request_id)

    if work_hour_request.employee_id != requester.id:
        raise AccessDenied("Access denied")

    if work_hour_request.status != WorkHourRequestStatus.PENDING:
        raise ValidationError("Cannot withdraw approved or rejected requests")

    db.delete(work_hour_request)
    db.commit()
    logger.info("Work hour request %s withdrawn by %s", request_id, requester.id)


def approved_dates(db: Session, employee_id: str) -> List[date]:
    rows = db.query(WorkHourRequest.requested_date).filter(
        WorkHourRequest.employee_id == employee_id,
        WorkHourRequest.status == WorkHourRequestStatus.APPROVED
    ).distinct().all()
    return [row.requested_date for row in rows]


def available_approved_dates(db: Session, employee_id: str) -> List[date]:
    """Approved request dates the employee has not yet filed an entry for."""
    filed = {
        row.date for row in db.query(WorkEntry.date).filter(WorkEntry.user_id == employee_id).all()
    }
    return sorted(d for d in approved_dates(db, employee_id) if d not in filed)
