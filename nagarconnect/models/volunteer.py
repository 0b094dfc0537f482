from typing import List, Optional
import uuid
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class Volunteer(SQLModel, table=True):
    __tablename__ = "volunteers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # One volunteer profile per user
    user_id: uuid.UUID = Field(foreign_key="users.id", unique=True)

    full_name: str
    email: str
    phone: Optional[str] = None
    skills: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    availability: Optional[str] = None

    is_active: bool = Field(default=True, index=True)
