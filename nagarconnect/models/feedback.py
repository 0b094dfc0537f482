from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class Feedback(SQLModel, table=True):
    __tablename__ = "feedback"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    issue_id: uuid.UUID = Field(foreign_key="issues.id", index=True, ondelete="CASCADE")
    user_id: uuid.UUID = Field(foreign_key="users.id")

    rating: int  # 1..5
    comment: Optional[str] = None
