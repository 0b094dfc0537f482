import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from pydantic import BaseModel
from sqlmodel import Session, func, select

from nagarconnect.db.db import get_session
from nagarconnect.models.approval_request import ApprovalRequest, ApprovalStatus
from nagarconnect.models.community_event import CommunityEvent
from nagarconnect.models.emergency_alert import EmergencyAlert
from nagarconnect.models.issue import Issue, IssueStatus
from nagarconnect.models.local_stall import LocalStall
from nagarconnect.models.user import User
from nagarconnect.schemas.approval_schemas import (
    ApprovalDecision,
    ApprovalRequestDetail,
    ApprovalRequestRead,
    RejectionDecision,
)
from nagarconnect.schemas.community_schemas import (
    AlertRead,
    AlertUpdate,
    AlertWrite,
    EventRead,
    EventUpdate,
    EventWrite,
    StallRead,
    StallUpdate,
    StallWrite,
)
from nagarconnect.schemas.issue_schemas import IssueRead, StatusUpdateSchema
from nagarconnect.services.approvals import ApprovalService
from nagarconnect.services.community import CommunityService
from nagarconnect.services.status_transitions import StatusTransitionHandler
from nagarconnect.utils.auth_helper import (
    get_bearer_token,
    get_current_user_required,
    require_admin,
)

router = APIRouter()


# Response Models
class OverviewStats(BaseModel):
    total_issues: int
    issues_current_month: int
    submitted: int
    acknowledged: int
    in_progress: int
    resolved: int
    resolved_current_month: int
    approvals_pending: int


@router.get("/stats", response_model=OverviewStats)
def get_overview_stats(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    """Get overview statistics for the admin dashboard"""
    now = datetime.now(timezone.utc)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    # Issues
    total, current, submitted, acknowledged, in_progress, resolved, resolved_current = session.exec(
        select(
            func.count(Issue.id),
            func.count().filter(Issue.created_at >= month_start),
            func.count().filter(Issue.status == IssueStatus.submitted),
            func.count().filter(Issue.status == IssueStatus.acknowledged),
            func.count().filter(Issue.status == IssueStatus.in_progress),
            func.count().filter(Issue.status == IssueStatus.resolved),
            func.count().filter(Issue.resolved_at >= month_start),
        )
    ).one()

    # Approvals
    approvals_pending = session.exec(
        select(func.count(ApprovalRequest.id))
        .where(ApprovalRequest.status == ApprovalStatus.pending)
    ).one()

    return OverviewStats(
        total_issues=total,
        issues_current_month=current,
        submitted=submitted,
        acknowledged=acknowledged,
        in_progress=in_progress,
        resolved=resolved,
        resolved_current_month=resolved_current,
        approvals_pending=approvals_pending,
    )


# ---------- issues ----------

@router.post("/issues/{issue_id}/status", response_model=IssueRead)
def update_issue_status(
    issue_id: uuid.UUID,
    payload: StatusUpdateSchema,
    request: Request,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
    token: Optional[str] = Depends(get_bearer_token),
):
    # admin rights are checked by the privileged procedure itself
    handler = StatusTransitionHandler(
        session,
        request.app.state.dispatcher,
        background=background_tasks,
    )
    return handler.transition(
        issue_id, payload.status, current_user, token, language=payload.language
    ).unwrap()


# ---------- approval requests ----------

@router.get("/approvals", response_model=List[ApprovalRequestDetail])
def list_approval_requests(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return ApprovalService(session).list_all().unwrap()


@router.post("/approvals/{request_id}/approve", response_model=ApprovalRequestRead)
def approve_request(
    request_id: uuid.UUID,
    payload: ApprovalDecision,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return ApprovalService(session).approve(request_id, admin, payload.admin_notes).unwrap()


@router.post("/approvals/{request_id}/reject", response_model=ApprovalRequestRead)
def reject_request(
    request_id: uuid.UUID,
    payload: RejectionDecision,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return ApprovalService(session).reject(request_id, admin, payload.admin_notes).unwrap()


@router.delete("/approvals/{request_id}")
def delete_request(
    request_id: uuid.UUID,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    ApprovalService(session).delete(request_id).unwrap()
    return {"ok": True}


# ---------- local stalls ----------

@router.get("/stalls", response_model=List[StallRead])
def list_stalls(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).all_stalls().unwrap()


@router.post("/stalls", response_model=StallRead, status_code=201)
def create_stall(
    payload: StallWrite,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).create(LocalStall, payload).unwrap()


@router.patch("/stalls/{stall_id}", response_model=StallRead)
def update_stall(
    stall_id: uuid.UUID,
    payload: StallUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).update(LocalStall, stall_id, payload, "stall_not_found").unwrap()


@router.delete("/stalls/{stall_id}")
def delete_stall(
    stall_id: uuid.UUID,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    CommunityService(session).delete(LocalStall, stall_id, "stall_not_found").unwrap()
    return {"ok": True}


# ---------- emergency alerts ----------

@router.get("/alerts", response_model=List[AlertRead])
def list_alerts(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).all_alerts().unwrap()


@router.post("/alerts", response_model=AlertRead, status_code=201)
def create_alert(
    payload: AlertWrite,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).create(EmergencyAlert, payload, created_by=admin.id).unwrap()


@router.patch("/alerts/{alert_id}", response_model=AlertRead)
def update_alert(
    alert_id: uuid.UUID,
    payload: AlertUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).update(EmergencyAlert, alert_id, payload, "alert_not_found").unwrap()


@router.delete("/alerts/{alert_id}")
def delete_alert(
    alert_id: uuid.UUID,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    CommunityService(session).delete(EmergencyAlert, alert_id, "alert_not_found").unwrap()
    return {"ok": True}


# ---------- community events ----------

@router.get("/events", response_model=List[EventRead])
def list_events(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).all_events().unwrap()


@router.post("/events", response_model=EventRead, status_code=201)
def create_event(
    payload: EventWrite,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).create(CommunityEvent, payload, created_by=admin.id).unwrap()


@router.patch("/events/{event_id}", response_model=EventRead)
def update_event(
    event_id: uuid.UUID,
    payload: EventUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    return CommunityService(session).update(CommunityEvent, event_id, payload, "event_not_found").unwrap()


@router.delete("/events/{event_id}")
def delete_event(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin)
):
    CommunityService(session).delete(CommunityEvent, event_id, "event_not_found").unwrap()
    return {"ok": True}
