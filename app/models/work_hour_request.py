from sqlalchemy import Column, String, Date, DateTime, Text, Index, Enum as SQLEnum, text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
from app.db.session import Base


class WorkHourRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkHourRequest(Base):
    __tablename__ = "work_hour_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(36), nullable=False, index=True)
    requested_date = Column(Date, nullable=False, index=True)
    reason = Column(Text, nullable=False)
    status = Column(SQLEnum(WorkHourRequestStatus), nullable=False, default=WorkHourRequestStatus.PENDING)
    manager_id = Column(String(36), nullable=True)
    manager_comments = Column(Text, nullable=True)

    requested_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    reviewed_at = Column(DateTime, nullable=True)

    # Only one pending request per employee and date
    __table_args__ = (
        Index(
            'uq_pending_work_hour_request',
            'employee_id',
            'requested_date',
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
            sqlite_where=text("status = 'PENDING'"),
        ),
    )

    # Relationships
    employee = relationship("User", primaryjoin="foreign(WorkHourRequest.employee_id) == User.id", viewonly=True)
    manager = relationship("User", primaryjoin="foreign(WorkHourRequest.manager_id) == User.id", viewonly=True)
