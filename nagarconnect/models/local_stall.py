from typing import Optional
import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class LocalStall(SQLModel, table=True):
    __tablename__ = "local_stalls"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    name: str
    description: Optional[str] = None
    category: str
    address: Optional[str] = None
    phone: Optional[str] = None

    discount_info: Optional[str] = None
    discount_percentage: Optional[int] = None

    photo_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    is_active: bool = Field(default=True, index=True)
