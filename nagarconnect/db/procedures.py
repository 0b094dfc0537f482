"""Privileged server-side procedures.

Each procedure re-checks the caller against ``admin_users`` rather than
trusting anything the client sent.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session, func, select

from nagarconnect.core.errors import NotFound, Unauthorized
from nagarconnect.models.approval_request import ApprovalRequest, ApprovalRequestType
from nagarconnect.models.issue import Issue, IssueStatus
from nagarconnect.models.user import AdminUser

CERTIFICATE_PREFIXES = {
    ApprovalRequestType.donation_certificate: "DON",
    ApprovalRequestType.volunteer_certificate: "VOL",
}


def is_admin(session: Session, user_id: Optional[uuid.UUID]) -> bool:
    if user_id is None:
        return False
    row = session.exec(
        select(AdminUser.id).where(AdminUser.user_id == user_id)
    ).first()
    return row is not None


def admin_update_issue_status(
    session: Session,
    caller_id: uuid.UUID,
    issue_id: uuid.UUID,
    status: IssueStatus,
    resolved_at: Optional[datetime] = None,
) -> Issue:
    """Set an issue's status; commits and returns the refreshed row.

    ``resolved_at`` is kept non-null exactly while the status is resolved.
    Any status may follow any other.
    """
    if not is_admin(session, caller_id):
        raise Unauthorized()

    issue = session.get(Issue, issue_id)
    if not issue:
        raise NotFound("issue_not_found")

    now = datetime.now(timezone.utc)

    if status == IssueStatus.resolved:
        if issue.status != IssueStatus.resolved or issue.resolved_at is None:
            issue.resolved_at = resolved_at or now
    else:
        issue.resolved_at = None

    issue.status = status
    issue.updated_at = now

    session.add(issue)
    session.commit()
    session.refresh(issue)
    return issue


def generate_certificate_number(session: Session, request_type: ApprovalRequestType) -> str:
    """``<PREFIX>-<YEAR>-<SEQ>``, one past the highest sequence issued this year.

    Deleting a request never makes the next number collide with a surviving one.
    """
    year = datetime.now(timezone.utc).year
    prefix = f"{CERTIFICATE_PREFIXES[request_type]}-{year}-"

    latest = session.exec(
        select(func.max(ApprovalRequest.certificate_number)).where(
            ApprovalRequest.certificate_number.startswith(prefix),
        )
    ).one()

    issued = int(latest[len(prefix):]) if latest else 0
    return f"{prefix}{issued + 1:05d}"
