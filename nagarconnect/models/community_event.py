from enum import Enum
from typing import Optional
import uuid
from sqlmodel import Field, SQLModel, UniqueConstraint
from datetime import datetime, timezone


class EventType(str, Enum):
    camp = "camp"
    community_event = "community_event"
    meetup = "meetup"


class CommunityEvent(SQLModel, table=True):
    __tablename__ = "community_events"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    created_by: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id")

    title_en: str
    title_hi: str
    description_en: Optional[str] = None
    description_hi: Optional[str] = None

    event_type: EventType = Field(index=True)
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    start_date: datetime = Field(index=True)
    end_date: Optional[datetime] = None

    photo_url: Optional[str] = None
    max_participants: Optional[int] = None
    is_active: bool = Field(default=True, index=True)


class EventRegistration(SQLModel, table=True):
    __tablename__ = "event_registrations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    registered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    event_id: uuid.UUID = Field(foreign_key="community_events.id", index=True, ondelete="CASCADE")
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    __table_args__ = (
        UniqueConstraint(
            "event_id",
            "user_id",
            name="uq_event_user_registration"
        ),
    )
