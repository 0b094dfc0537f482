import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from nagarconnect import i18n
from nagarconnect.core.errors import AuthenticationRequired, Conflict, NotFound, ValidationError
from nagarconnect.core.result import returns_outcome
from nagarconnect.db.procedures import generate_certificate_number, is_admin
from nagarconnect.models.approval_request import (
    CERTIFICATE_TYPES,
    ApprovalRequest,
    ApprovalRequestType,
    ApprovalStatus,
)
from nagarconnect.models.community_event import CommunityEvent
from nagarconnect.models.donation import Donation
from nagarconnect.models.user import User
from nagarconnect.models.volunteer import Volunteer
from nagarconnect.schemas.approval_schemas import ApprovalRequestDetail, EventOrganizerRequest

logger = logging.getLogger(__name__)


class ApprovalService:
    """Certificate and event-permission requests and their one-time review."""

    def __init__(self, session: Session):
        self.session = session

    # ---------- citizen side ----------

    @returns_outcome
    def list_user_requests(self, user: User) -> List[ApprovalRequest]:
        return list(self.session.exec(
            select(ApprovalRequest)
            .where(ApprovalRequest.user_id == user.id)
            .order_by(ApprovalRequest.created_at.desc())
        ).all())

    @returns_outcome
    def request_donation_certificate(self, user: Optional[User], donation_id: uuid.UUID) -> ApprovalRequest:
        user = _require(user)

        donation = self.session.get(Donation, donation_id)
        if not donation or donation.user_id != user.id:
            raise NotFound("donation_not_found")

        return self._insert(ApprovalRequest(
            user_id=user.id,
            request_type=ApprovalRequestType.donation_certificate,
            reference_id=donation.id,
        ))

    @returns_outcome
    def request_volunteer_certificate(self, user: Optional[User]) -> ApprovalRequest:
        user = _require(user)

        volunteer = self.session.exec(
            select(Volunteer).where(Volunteer.user_id == user.id)
        ).first()
        if not volunteer:
            raise ValidationError("not_a_volunteer")

        return self._insert(ApprovalRequest(
            user_id=user.id,
            request_type=ApprovalRequestType.volunteer_certificate,
            reference_id=volunteer.id,
        ))

    @returns_outcome
    def request_event_stall(self, user: Optional[User], event_id: uuid.UUID, stall_description: str) -> ApprovalRequest:
        user = _require(user)

        if not self.session.get(CommunityEvent, event_id):
            raise NotFound("event_not_found")

        return self._insert(ApprovalRequest(
            user_id=user.id,
            request_type=ApprovalRequestType.event_stall,
            event_id=event_id,
            stall_description=stall_description,
        ))

    @returns_outcome
    def request_event_organizer(self, user: Optional[User], payload: EventOrganizerRequest) -> ApprovalRequest:
        user = _require(user)

        return self._insert(ApprovalRequest(
            user_id=user.id,
            request_type=ApprovalRequestType.event_organizer,
            proposed_event_title=payload.title,
            proposed_event_description=payload.description,
            proposed_event_date=payload.date,
            proposed_event_location=payload.location,
        ))

    # ---------- admin side ----------

    @returns_outcome
    def list_all(self) -> List[ApprovalRequestDetail]:
        requests = self.session.exec(
            select(ApprovalRequest).order_by(ApprovalRequest.created_at.desc())
        ).all()

        detailed = []
        for req in requests:
            detail = ApprovalRequestDetail.model_validate(req)
            requester = self.session.get(User, req.user_id)
            if requester:
                detail.user_email = requester.email

            if req.request_type == ApprovalRequestType.donation_certificate and req.reference_id:
                donation = self.session.get(Donation, req.reference_id)
                if donation:
                    detail.donation_amount = donation.amount
                    detail.user_email = donation.donor_email or detail.user_email

            elif req.request_type == ApprovalRequestType.volunteer_certificate and req.reference_id:
                volunteer = self.session.get(Volunteer, req.reference_id)
                if volunteer:
                    detail.volunteer_name = volunteer.full_name
                    detail.user_email = volunteer.email

            elif req.request_type == ApprovalRequestType.event_stall and req.event_id:
                event = self.session.get(CommunityEvent, req.event_id)
                if event:
                    detail.event_title = event.title_en

            detailed.append(detail)

        return detailed

    @returns_outcome
    def approve(self, request_id: uuid.UUID, admin: User, admin_notes: Optional[str] = None) -> ApprovalRequest:
        req = self._pending(request_id)
        now = datetime.now(timezone.utc)

        req.status = ApprovalStatus.approved
        req.reviewed_by = admin.id
        req.reviewed_at = now
        req.admin_notes = admin_notes
        req.updated_at = now

        # Certificate number lands in the same commit as the approval
        if req.request_type in CERTIFICATE_TYPES:
            req.certificate_number = generate_certificate_number(self.session, req.request_type)
            req.certificate_generated_at = now

        self.session.add(req)
        self.session.commit()
        self.session.refresh(req)

        logger.info("approval request %s approved by %s (%s)", req.id, admin.id, req.certificate_number)
        return req

    @returns_outcome
    def reject(self, request_id: uuid.UUID, admin: User, admin_notes: str) -> ApprovalRequest:
        req = self._pending(request_id)
        now = datetime.now(timezone.utc)

        req.status = ApprovalStatus.rejected
        req.reviewed_by = admin.id
        req.reviewed_at = now
        req.admin_notes = admin_notes
        req.updated_at = now

        self.session.add(req)
        self.session.commit()
        self.session.refresh(req)

        logger.info("approval request %s rejected by %s", req.id, admin.id)
        return req

    @returns_outcome
    def delete(self, request_id: uuid.UUID) -> bool:
        req = self.session.get(ApprovalRequest, request_id)
        if not req:
            raise NotFound("request_not_found")

        self.session.delete(req)
        self.session.commit()
        return True

    @returns_outcome
    def certificate_text(self, request_id: uuid.UUID, user: User, language: str) -> str:
        """Plain-text certificate for an approved request; owner or admin only."""
        req = self.session.get(ApprovalRequest, request_id)
        if not req or (req.user_id != user.id and not is_admin(self.session, user.id)):
            raise NotFound("request_not_found")
        if req.status != ApprovalStatus.approved or not req.certificate_number:
            raise NotFound("certificate_not_issued")

        issued = req.certificate_generated_at
        return i18n.CERTIFICATE_TEXT[language].format(
            number=req.certificate_number,
            type=i18n.request_type_label(req.request_type.value, language),
            issued=issued.strftime("%d %B %Y") if issued else "N/A",
        )

    # ---------- helpers ----------

    def _pending(self, request_id: uuid.UUID) -> ApprovalRequest:
        req = self.session.get(ApprovalRequest, request_id)
        if not req:
            raise NotFound("request_not_found")
        if req.status != ApprovalStatus.pending:
            raise Conflict("already_decided")
        return req

    def _insert(self, req: ApprovalRequest) -> ApprovalRequest:
        try:
            self.session.add(req)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("already_requested")

        self.session.refresh(req)
        logger.info("user %s filed %s request %s", req.user_id, req.request_type.value, req.id)
        return req


def _require(user: Optional[User]) -> User:
    if user is None:
        raise AuthenticationRequired()
    return user
