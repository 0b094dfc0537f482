from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Ownership
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    # Both languages are stored; the client picks one at display time
    title_en: str
    title_hi: str
    message_en: str
    message_hi: str

    issue_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="issues.id",
        index=True,
        ondelete="CASCADE",
    )

    is_read: bool = Field(default=False)
