from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from datetime import datetime
import uuid
import enum
from app.db.session import Base


class UserRole(str, enum.Enum):
    EMPLOYEE = "employee"
    HR = "hr"
    MANAGER = "manager"


REVIEWER_ROLES = (UserRole.HR, UserRole.MANAGER)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(50), unique=True, nullable=False)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    designation = Column(String(100), nullable=False)
    department = Column(String(100), nullable=False, index=True)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.EMPLOYEE)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_reviewer(self) -> bool:
        return self.role in REVIEWER_ROLES
