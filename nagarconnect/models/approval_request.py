from enum import Enum
from typing import Optional
import uuid
from sqlmodel import Field, SQLModel, UniqueConstraint
from datetime import datetime, timezone


class ApprovalRequestType(str, Enum):
    donation_certificate = "donation_certificate"
    volunteer_certificate = "volunteer_certificate"
    event_stall = "event_stall"
    event_organizer = "event_organizer"


class ApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


CERTIFICATE_TYPES = (
    ApprovalRequestType.donation_certificate,
    ApprovalRequestType.volunteer_certificate,
)


class ApprovalRequest(SQLModel, table=True):
    __tablename__ = "approval_requests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Requester
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    request_type: ApprovalRequestType = Field(index=True)
    status: ApprovalStatus = Field(default=ApprovalStatus.pending, index=True)

    # Donation or volunteer id for certificate requests
    reference_id: Optional[uuid.UUID] = Field(default=None)

    # event_stall
    event_id: Optional[uuid.UUID] = Field(default=None, foreign_key="community_events.id", ondelete="SET NULL")
    stall_description: Optional[str] = None

    # event_organizer
    proposed_event_title: Optional[str] = None
    proposed_event_description: Optional[str] = None
    proposed_event_date: Optional[datetime] = None
    proposed_event_location: Optional[str] = None

    # Review
    admin_notes: Optional[str] = None
    reviewed_by: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id")
    reviewed_at: Optional[datetime] = None

    certificate_number: Optional[str] = Field(default=None, unique=True)
    certificate_generated_at: Optional[datetime] = None

    __table_args__ = (
        # One certificate request per referenced donation / volunteer profile
        UniqueConstraint(
            "user_id",
            "request_type",
            "reference_id",
            name="uq_user_request_reference"
        ),
    )
