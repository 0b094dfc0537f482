import uuid
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nagarconnect.models.issue import IssueCategory, IssueStatus


class IssueCreateSchema(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    description: Optional[str] = Field(None, max_length=2000)
    category: IssueCategory = IssueCategory.other
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = Field(None, max_length=300)
    photo_url: Optional[str] = None
    user_phone: Optional[str] = None

    @field_validator("title", "description", "address", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class IssueRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    user_email: str
    user_phone: Optional[str]
    title: str
    description: Optional[str]
    category: IssueCategory
    latitude: Optional[float]
    longitude: Optional[float]
    address: Optional[str]
    photo_url: Optional[str]
    before_photo_url: Optional[str]
    after_photo_url: Optional[str]
    status: IssueStatus
    upvotes: int
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime]


class StatusUpdateSchema(BaseModel):
    status: IssueStatus
    language: Optional[Literal["en", "hi"]] = None


class UpvoteResult(BaseModel):
    issue_id: uuid.UUID
    upvoted: bool
    upvotes: int


class FeedbackCreateSchema(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class IssueStats(BaseModel):
    total: int
    pending: int
    resolved: int
    today: int


class MapMarker(BaseModel):
    id: uuid.UUID
    latitude: float
    longitude: float
    color: str
    title: str
    description: Optional[str]
    status: IssueStatus
    status_label: str
    category: IssueCategory
    category_label: str
    upvotes: int


class MapView(BaseModel):
    configured: bool
    token: Optional[str]
    error: Optional[str]
    style: str
    center: List[float]
    zoom: int
    markers: List[MapMarker]


class PhotoUploadResult(BaseModel):
    path: str
    url: str
