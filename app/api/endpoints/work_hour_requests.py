from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.work_hour_request import WorkHourRequestStatus
from app.schemas import (
    WorkHourRequestCreate, WorkHourRequestReview, WorkHourRequestResponse,
    WorkHourRequestWithUser, AvailableDatesResponse, MessageResponse
)
from app.api.dependencies import get_current_user, require_employee, require_manager
from app.services import export
from app.services import work_hour_requests as request_service

router = APIRouter(prefix="/work-hour-requests", tags=["Work Hour Requests"])


@router.post("", response_model=WorkHourRequestResponse, status_code=status.HTTP_201_CREATED)
def create_work_hour_request(
    request_create: WorkHourRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Ask to log hours for a missed past date."""
    return request_service.create_request(db, current_user, request_create)


@router.get("/my", response_model=List[WorkHourRequestWithUser])
def list_my_work_hour_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    return request_service.list_mine(db, current_user.id)


@router.get("/available-dates", response_model=AvailableDatesResponse)
def get_available_dates(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Approved dates the current user can still file an entry for."""
    return {"dates": request_service.available_approved_dates(db, current_user.id)}


@router.get("", response_model=List[WorkHourRequestWithUser])
def list_pending_work_hour_requests(
    db: Session = Depends(get_db),
    _: User = Depends(require_manager)
):
    """All pending requests across the organization (manager only)."""
    return request_service.list_pending(db)


@router.get("/export")
def export_work_hour_requests(
    status_filter: Optional[WorkHourRequestStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(require_manager)
):
    """Export requests as CSV; every status unless one is given."""
    requests = request_service.list_requests(db, status_filter)
    rows = export.work_hour_request_rows(requests)
    filename = f"work_hour_requests_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    return Response(
        content=export.to_csv(export.WORK_HOUR_REQUEST_COLUMNS, rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/{request_id}", response_model=WorkHourRequestWithUser)
def get_work_hour_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return request_service.get_request(db, request_id, current_user)


@router.put("/{request_id}", response_model=WorkHourRequestResponse)
def review_work_hour_request(
    request_id: str,
    review: WorkHourRequestReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Approve or reject a pending request."""
    return request_service.review_request(
        db, request_id, review.status, current_user, review.manager_comments
    )


@router.delete("/{request_id}", response_model=MessageResponse)
def withdraw_work_hour_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Withdraw one of your own pending requests."""
    request_service.delete_request(db, request_id, current_user)
    return {"message": "Work hour request withdrawn"}
