from enum import Enum
from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class LanguageType(str, Enum):
    en = "en"
    hi = "hi"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Credentials
    email: str = Field(index=True, unique=True)
    password_hash: str

    # Profile
    full_name: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    language: LanguageType = Field(default=LanguageType.en)  # used for emails about the user's issues


class AdminUser(SQLModel, table=True):
    """Membership in this table is the only source of administrative privilege."""

    __tablename__ = "admin_users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    user_id: uuid.UUID = Field(foreign_key="users.id", unique=True, ondelete="CASCADE")
