from datetime import date, datetime
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse, Response
from sqlalchemy.orm import Session
from typing import List, Literal, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.work_entry import WorkEntryStatus
from app.schemas import (
    WorkEntryCreate, WorkEntryResponse, WorkEntryWithUser, WorkEntryStatusUpdate,
    WorkEntryFilters, MessageResponse
)
from app.api.dependencies import get_current_user, require_reviewer
from app.core.date_filters import get_date_range
from app.core.exceptions import ValidationError
from app.services import export
from app.services import work_entries as work_entry_service

router = APIRouter(prefix="/work-entries", tags=["Work Entries"])


def entry_filters(
    user_id: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    status_filter: Optional[WorkEntryStatus] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    date_range: Optional[str] = Query(None, description="today, yesterday, this_week, last_week, this_month, last_month"),
) -> WorkEntryFilters:
    """Query-string filters; explicit dates win over a named range."""
    if date_range:
        try:
            range_start, range_end = get_date_range(date_range)
        except ValueError as e:
            raise ValidationError(str(e))
        start_date = start_date or range_start
        end_date = end_date or range_end

    return WorkEntryFilters(
        user_id=user_id,
        department=department,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("", response_model=WorkEntryResponse, status_code=status.HTTP_201_CREATED)
def create_work_entry(
    entry_create: WorkEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Log hours for today or for an approved past date."""
    return work_entry_service.create_entry(db, current_user, entry_create)


@router.get("/my", response_model=List[WorkEntryResponse])
def list_my_work_entries(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List the current user's entries, newest date first."""
    return work_entry_service.list_for_user(db, current_user.id, start_date, end_date, skip, limit)


@router.get("", response_model=List[WorkEntryWithUser])
def list_work_entries(
    filters: WorkEntryFilters = Depends(entry_filters),
    db: Session = Depends(get_db),
    _: User = Depends(require_reviewer)
):
    """List everyone's entries with the owner's profile (HR and managers)."""
    return work_entry_service.list_all(db, filters)


@router.get("/export")
def export_work_entries(
    format: Literal["json", "csv", "xlsx"] = Query("json"),
    filters: WorkEntryFilters = Depends(entry_filters),
    db: Session = Depends(get_db),
    _: User = Depends(require_reviewer)
):
    """Export filtered entries as JSON, CSV or Excel."""
    entries = work_entry_service.list_all(db, filters)
    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    if format == "json":
        return [WorkEntryWithUser.model_validate(entry) for entry in entries]

    rows = export.work_entry_rows(entries)

    if format == "csv":
        return Response(
            content=export.to_csv(export.WORK_ENTRY_COLUMNS, rows),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=work_entries_{stamp}.csv"}
        )

    excel_file = export.to_xlsx(export.WORK_ENTRY_COLUMNS, rows)
    return StreamingResponse(
        excel_file,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=work_entries_{stamp}.xlsx"}
    )


@router.patch("/{entry_id}/status", response_model=WorkEntryResponse)
def update_work_entry_status(
    entry_id: str,
    status_update: WorkEntryStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_reviewer)
):
    """Approve or reject an entry."""
    return work_entry_service.set_status(db, entry_id, status_update.status, current_user)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_work_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_reviewer)
):
    work_entry_service.delete_entry(db, entry_id)
    return {"message": "Work entry deleted successfully"}
