from sqlalchemy import Column, String, Date, Numeric, DateTime, Text, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
from app.db.session import Base


class WorkType(str, enum.Enum):
    TASK = "Task"
    PROJECT = "Project"
    MEETING = "Meeting"
    SKILL_UP = "Skill-up"
    PARTIAL_LEAVE = "Partial Leave"


class WorkEntryStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkEntry(Base):
    __tablename__ = "work_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # No foreign key: entries of deleted users are kept and filtered out of joined listings
    user_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    work_type = Column(SQLEnum(WorkType), nullable=False)
    description = Column(Text, nullable=False)
    time_spent = Column(Numeric(5, 2), nullable=False)
    status = Column(SQLEnum(WorkEntryStatus), nullable=False, default=WorkEntryStatus.PENDING)
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Unique constraint: one work entry per user per day
    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='uq_work_entry_user_date'),
    )

    # Relationships
    user = relationship("User", primaryjoin="foreign(WorkEntry.user_id) == User.id", viewonly=True)
