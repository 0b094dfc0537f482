import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from nagarconnect.models.approval_request import ApprovalRequestType, ApprovalStatus


class DonationCertificateRequest(BaseModel):
    donation_id: uuid.UUID


class EventStallRequest(BaseModel):
    event_id: uuid.UUID
    stall_description: str = Field(min_length=5, max_length=500)


class EventOrganizerRequest(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    description: str = Field(min_length=10, max_length=2000)
    date: datetime
    location: str = Field(min_length=3, max_length=300)


class ApprovalDecision(BaseModel):
    admin_notes: Optional[str] = Field(None, max_length=1000)


class RejectionDecision(BaseModel):
    admin_notes: str = Field(min_length=3, max_length=1000)


class ApprovalRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    request_type: ApprovalRequestType
    status: ApprovalStatus
    reference_id: Optional[uuid.UUID]
    event_id: Optional[uuid.UUID]
    stall_description: Optional[str]
    proposed_event_title: Optional[str]
    proposed_event_description: Optional[str]
    proposed_event_date: Optional[datetime]
    proposed_event_location: Optional[str]
    admin_notes: Optional[str]
    reviewed_by: Optional[uuid.UUID]
    reviewed_at: Optional[datetime]
    certificate_number: Optional[str]
    certificate_generated_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class ApprovalRequestDetail(ApprovalRequestRead):
    user_email: Optional[str] = None
    donation_amount: Optional[float] = None
    volunteer_name: Optional[str] = None
    event_title: Optional[str] = None
