import uuid
from datetime import datetime, timezone

import pytest

from nagarconnect.core.errors import NotFound, Unauthorized
from nagarconnect.db.procedures import admin_update_issue_status, generate_certificate_number, is_admin
from nagarconnect.models.approval_request import ApprovalRequestType
from nagarconnect.models.issue import IssueStatus
from nagarconnect.tests.helpers import create_issue, create_user


def test_is_admin_reads_admin_users(db):
    admin = create_user(db, "admin@example.com", admin=True)
    citizen = create_user(db)

    assert is_admin(db, admin.id) is True
    assert is_admin(db, citizen.id) is False
    assert is_admin(db, None) is False


def test_non_admin_cannot_change_status(db):
    citizen = create_user(db)
    issue = create_issue(db, citizen)

    with pytest.raises(Unauthorized):
        admin_update_issue_status(db, citizen.id, issue.id, IssueStatus.resolved)

    db.refresh(issue)
    assert issue.status == IssueStatus.submitted


def test_unknown_issue(db):
    admin = create_user(db, "admin@example.com", admin=True)

    with pytest.raises(NotFound):
        admin_update_issue_status(db, admin.id, uuid.uuid4(), IssueStatus.acknowledged)


def test_resolved_at_set_only_while_resolved(db):
    admin = create_user(db, "admin@example.com", admin=True)
    issue = create_issue(db, admin)

    issue = admin_update_issue_status(db, admin.id, issue.id, IssueStatus.in_progress)
    assert issue.resolved_at is None

    issue = admin_update_issue_status(db, admin.id, issue.id, IssueStatus.resolved)
    assert issue.resolved_at is not None
    first_resolved_at = issue.resolved_at

    # re-resolving keeps the original timestamp
    issue = admin_update_issue_status(db, admin.id, issue.id, IssueStatus.resolved)
    assert issue.resolved_at == first_resolved_at

    issue = admin_update_issue_status(db, admin.id, issue.id, IssueStatus.acknowledged)
    assert issue.status == IssueStatus.acknowledged
    assert issue.resolved_at is None


def test_any_status_may_follow_any_other(db):
    admin = create_user(db, "admin@example.com", admin=True)
    issue = create_issue(db, admin, status=IssueStatus.resolved)

    issue = admin_update_issue_status(db, admin.id, issue.id, IssueStatus.submitted)

    assert issue.status == IssueStatus.submitted


def test_certificate_number_format(db):
    number = generate_certificate_number(db, ApprovalRequestType.volunteer_certificate)

    assert number == f"VOL-{datetime.now(timezone.utc).year}-00001"
