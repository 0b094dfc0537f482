import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    issue_id: Optional[uuid.UUID]
    title_en: str
    title_hi: str
    message_en: str
    message_hi: str
    is_read: bool
    created_at: datetime


class NotificationRequest(BaseModel):
    """Body accepted by the send-notification function (camelCase on the wire)."""

    issueId: Optional[str] = None
    userEmail: Optional[str] = None
    issueTitle: Optional[str] = None
    oldStatus: Optional[str] = None
    newStatus: Optional[str] = None
    language: str = Field(default="en")

    def missing_fields(self) -> bool:
        return not (self.issueId and self.userEmail and self.issueTitle and self.newStatus)
