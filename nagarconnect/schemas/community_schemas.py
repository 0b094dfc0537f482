import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nagarconnect.models.community_event import EventType
from nagarconnect.models.emergency_alert import AlertSeverity


class DonationCreate(BaseModel):
    amount: float = Field(gt=0)
    purpose: Optional[str] = Field(None, max_length=300)
    is_anonymous: bool = False


class DonationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    donor_name: str
    amount: float
    purpose: Optional[str]
    is_anonymous: bool
    created_at: datetime


class VolunteerUpsert(BaseModel):
    full_name: str = Field(min_length=2, max_length=120)
    phone: Optional[str] = None
    skills: Optional[List[str]] = None
    availability: Optional[str] = Field(None, max_length=200)

    @field_validator("skills", mode="before")
    @classmethod
    def clean_skills(cls, v):
        if isinstance(v, list):
            return [s.strip() for s in v if isinstance(s, str) and s.strip()]
        return v


class VolunteerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    full_name: str
    email: str
    phone: Optional[str]
    skills: Optional[List[str]]
    availability: Optional[str]
    is_active: bool


class StallWrite(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    description: Optional[str] = None
    category: str = Field(min_length=2, max_length=60)
    address: Optional[str] = None
    phone: Optional[str] = None
    discount_info: Optional[str] = None
    discount_percentage: Optional[int] = Field(None, ge=0, le=100)
    photo_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_active: bool = True


class StallUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=120)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=2, max_length=60)
    address: Optional[str] = None
    phone: Optional[str] = None
    discount_info: Optional[str] = None
    discount_percentage: Optional[int] = Field(None, ge=0, le=100)
    photo_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_active: Optional[bool] = None


class StallRead(StallWrite):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime


class AlertWrite(BaseModel):
    title_en: str = Field(min_length=3)
    title_hi: str = Field(min_length=1)
    message_en: str = Field(min_length=3)
    message_hi: str = Field(min_length=1)
    severity: AlertSeverity = AlertSeverity.medium
    is_active: bool = True
    expires_at: Optional[datetime] = None


class AlertUpdate(BaseModel):
    title_en: Optional[str] = None
    title_hi: Optional[str] = None
    message_en: Optional[str] = None
    message_hi: Optional[str] = None
    severity: Optional[AlertSeverity] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None


class AlertRead(AlertWrite):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime


class EventWrite(BaseModel):
    title_en: str = Field(min_length=3)
    title_hi: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_hi: Optional[str] = None
    event_type: EventType
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    photo_url: Optional[str] = None
    max_participants: Optional[int] = Field(None, gt=0)
    is_active: bool = True


class EventUpdate(BaseModel):
    title_en: Optional[str] = None
    title_hi: Optional[str] = None
    description_en: Optional[str] = None
    description_hi: Optional[str] = None
    event_type: Optional[EventType] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    photo_url: Optional[str] = None
    max_participants: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None


class EventRead(EventWrite):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime


class RegistrationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    event_id: uuid.UUID
    user_id: uuid.UUID
    registered_at: datetime
