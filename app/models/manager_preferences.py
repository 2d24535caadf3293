from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from typing import List
import json
import uuid
from app.db.session import Base


class ManagerPreferences(Base):
    __tablename__ = "manager_preferences"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    manager_id = Column(String(36), unique=True, nullable=False, index=True)
    selected_employee_ids = Column(Text, nullable=False, default="[]")  # JSON array of user ids

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def employee_ids(self) -> List[str]:
        return json.loads(self.selected_employee_ids or "[]")

    @employee_ids.setter
    def employee_ids(self, value: List[str]) -> None:
        self.selected_employee_ids = json.dumps(list(value))
