from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from app.models.user import UserRole
from app.models.work_entry import WorkEntryStatus, WorkType
from app.models.work_hour_request import WorkHourRequestStatus


# ============= User Schemas =============
class UserBase(BaseModel):
    employee_id: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    designation: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    role: UserRole = UserRole.EMPLOYEE


class UserCreate(UserBase):
    username: Optional[str] = None  # Generated as first.last when omitted
    password: Optional[str] = Field(None, min_length=6)


class UserUpdate(BaseModel):
    """Manager-side profile update. Passwords are never changed through this schema."""
    employee_id: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    role: Optional[UserRole] = None


class UserResponse(UserBase):
    """Public profile: every identity field except the credential."""
    id: str
    username: str

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str


class FederatedLoginResponse(Token):
    redirect_to: str
    user: UserResponse


# ============= Work Entry Schemas =============
class WorkEntryBase(BaseModel):
    date: date
    work_type: WorkType
    description: str = Field(..., min_length=1)
    time_spent: Decimal = Field(..., gt=0, max_digits=5, decimal_places=2)  # Decimal hours, fits Numeric(5, 2)


class WorkEntryCreate(WorkEntryBase):
    pass


class WorkEntryResponse(WorkEntryBase):
    id: str
    user_id: str
    status: WorkEntryStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class WorkEntryWithUser(WorkEntryResponse):
    user: UserResponse


class WorkEntryStatusUpdate(BaseModel):
    status: WorkEntryStatus

    @field_validator('status')
    @classmethod
    def validate_decision(cls, v):
        if v == WorkEntryStatus.PENDING:
            raise ValueError('Status must be approved or rejected')
        return v


class WorkEntryFilters(BaseModel):
    user_id: Optional[str] = None
    department: Optional[str] = None
    status: Optional[WorkEntryStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class DailyWorkReport(BaseModel):
    date: date
    entries: List[WorkEntryResponse] = []
    total_hours: float = 0


# ============= Work Hour Request Schemas =============
class WorkHourRequestCreate(BaseModel):
    requested_date: date
    reason: str = Field(..., min_length=1)


class WorkHourRequestReview(BaseModel):
    status: WorkHourRequestStatus
    manager_comments: Optional[str] = None

    @field_validator('status')
    @classmethod
    def validate_decision(cls, v):
        if v == WorkHourRequestStatus.PENDING:
            raise ValueError('Status must be approved or rejected')
        return v


class WorkHourRequestResponse(BaseModel):
    id: str
    employee_id: str
    requested_date: date
    reason: str
    status: WorkHourRequestStatus
    manager_id: Optional[str] = None
    manager_comments: Optional[str] = None
    requested_at: datetime
    reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorkHourRequestWithUser(WorkHourRequestResponse):
    employee: Optional[UserResponse] = None
    manager: Optional[UserResponse] = None


class AvailableDatesResponse(BaseModel):
    dates: List[date]


# ============= Statistics Schemas =============
class OrganizationStats(BaseModel):
    total_employees: int
    total_entries: int
    total_hours: float
    avg_hours: float
    submitted_today: int
    not_submitted_today: int


class EmployeeStats(BaseModel):
    today_hours: float
    week_hours: float
    month_hours: float
    status: str = "On Track"


class ManagerDashboardStats(BaseModel):
    total_employees: int
    submitted: int
    not_submitted: int
    total_work_hours: float


# ============= Manager Preferences Schemas =============
class ManagerPreferencesUpdate(BaseModel):
    selected_employee_ids: List[str]


class ManagerPreferencesResponse(BaseModel):
    manager_id: Optional[str] = None
    selected_employee_ids: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str
