import uuid
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from nagarconnect.core.errors import request_language
from nagarconnect.db.db import get_session
from nagarconnect.models.user import User
from nagarconnect.schemas.approval_schemas import (
    ApprovalRequestRead,
    DonationCertificateRequest,
    EventOrganizerRequest,
    EventStallRequest,
)
from nagarconnect.services.approvals import ApprovalService
from nagarconnect.utils.auth_helper import get_current_user_required


router = APIRouter()


@router.get("/mine", response_model=List[ApprovalRequestRead])
def my_requests(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return ApprovalService(session).list_user_requests(current_user).unwrap()


@router.get("/{request_id}/certificate", response_class=PlainTextResponse)
def download_certificate(
    request_id: uuid.UUID,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    text = ApprovalService(session).certificate_text(
        request_id, current_user, request_language(request)
    ).unwrap()
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="certificate-{request_id}.txt"'},
    )


@router.post("/donation-certificate", response_model=ApprovalRequestRead, status_code=201)
def request_donation_certificate(
    payload: DonationCertificateRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return ApprovalService(session).request_donation_certificate(
        current_user, payload.donation_id
    ).unwrap()


@router.post("/volunteer-certificate", response_model=ApprovalRequestRead, status_code=201)
def request_volunteer_certificate(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return ApprovalService(session).request_volunteer_certificate(current_user).unwrap()


@router.post("/event-stall", response_model=ApprovalRequestRead, status_code=201)
def request_event_stall(
    payload: EventStallRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return ApprovalService(session).request_event_stall(
        current_user, payload.event_id, payload.stall_description
    ).unwrap()


@router.post("/event-organizer", response_model=ApprovalRequestRead, status_code=201)
def request_event_organizer(
    payload: EventOrganizerRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return ApprovalService(session).request_event_organizer(current_user, payload).unwrap()
