from enum import Enum
from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class IssueCategory(str, Enum):
    waste = "waste"
    roads = "roads"
    streetlights = "streetlights"
    water = "water"
    other = "other"


class IssueStatus(str, Enum):
    submitted = "submitted"
    acknowledged = "acknowledged"
    in_progress = "in_progress"
    resolved = "resolved"


class Issue(SQLModel, table=True):
    __tablename__ = "issues"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Reporter info
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    user_email: str
    user_phone: Optional[str] = Field(default=None)

    # Issue fields
    title: str
    description: Optional[str] = Field(default=None)
    category: IssueCategory = Field(default=IssueCategory.other, index=True)

    # Location
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)
    address: Optional[str] = Field(default=None)

    # Photos
    photo_url: Optional[str] = Field(default=None)
    before_photo_url: Optional[str] = Field(default=None)
    after_photo_url: Optional[str] = Field(default=None)

    # Lifecycle
    status: IssueStatus = Field(default=IssueStatus.submitted, index=True)
    resolved_at: Optional[datetime] = Field(default=None)  # set only while status is resolved

    # Cached count of issue_upvotes rows
    upvotes: int = Field(default=0)
