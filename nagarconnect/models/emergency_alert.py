from enum import Enum
from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class AlertSeverity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


SEVERITY_RANK = {
    AlertSeverity.low: 0,
    AlertSeverity.medium: 1,
    AlertSeverity.high: 2,
    AlertSeverity.critical: 3,
}


class EmergencyAlert(SQLModel, table=True):
    __tablename__ = "emergency_alerts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    created_by: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id")

    title_en: str
    title_hi: str
    message_en: str
    message_hi: str

    severity: AlertSeverity = Field(default=AlertSeverity.medium, index=True)
    is_active: bool = Field(default=True, index=True)
    expires_at: Optional[datetime] = None
