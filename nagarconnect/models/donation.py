from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class Donation(SQLModel, table=True):
    __tablename__ = "donations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)

    user_id: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id", index=True)

    donor_name: str
    donor_email: Optional[str] = None
    donor_phone: Optional[str] = None

    amount: float
    purpose: Optional[str] = None
    is_anonymous: bool = Field(default=False)
