from fastapi import BackgroundTasks
from sqlmodel import select

from nagarconnect.core.errors import Unauthorized
from nagarconnect.models.issue import IssueStatus
from nagarconnect.models.notification import Notification
from nagarconnect.services.status_transitions import StatusTransitionHandler
from nagarconnect.tests.helpers import create_issue, create_user


class FakeDispatcher:
    async def send(self, payload, token):
        return {"success": True}


def test_transition_notifies_reporter_and_schedules_email(db):
    admin = create_user(db, "admin@example.com", admin=True)
    citizen = create_user(db, language="hi")
    issue = create_issue(db, citizen)
    dispatcher = FakeDispatcher()
    background = BackgroundTasks()

    updated = StatusTransitionHandler(db, dispatcher, background).transition(
        issue.id, IssueStatus.resolved, admin, "admin-token",
    ).unwrap()

    assert updated.status == IssueStatus.resolved
    assert updated.resolved_at is not None

    notices = db.exec(select(Notification).where(Notification.user_id == citizen.id)).all()
    assert [n.title_en for n in notices] == ["Status Update: RESOLVED"]
    assert notices[0].message_en == "Your issue has been resolved!"

    assert len(background.tasks) == 1
    task = background.tasks[0]
    payload, token = task.args
    assert task.func == dispatcher.send
    assert token == "admin-token"
    assert payload == {
        "issueId": str(issue.id),
        "userEmail": citizen.email,
        "issueTitle": issue.title,
        "oldStatus": "submitted",
        "newStatus": "resolved",
        "language": "hi",
    }


def test_explicit_language_wins(db):
    admin = create_user(db, "admin@example.com", admin=True)
    citizen = create_user(db, language="hi")
    issue = create_issue(db, citizen)
    background = BackgroundTasks()

    StatusTransitionHandler(db, FakeDispatcher(), background).transition(
        issue.id, IssueStatus.acknowledged, admin, "admin-token", language="en",
    ).unwrap()

    assert background.tasks[0].args[0]["language"] == "en"


def test_rejected_transition_sends_nothing(db):
    citizen = create_user(db)
    issue = create_issue(db, citizen)
    background = BackgroundTasks()

    outcome = StatusTransitionHandler(db, FakeDispatcher(), background).transition(
        issue.id, IssueStatus.resolved, citizen, "citizen-token",
    )

    assert isinstance(outcome.error, Unauthorized)
    assert background.tasks == []
    assert db.exec(select(Notification)).all() == []


def test_missing_credential_skips_email_but_keeps_status(db):
    admin = create_user(db, "admin@example.com", admin=True)
    issue = create_issue(db, admin)
    background = BackgroundTasks()

    updated = StatusTransitionHandler(db, FakeDispatcher(), background).transition(
        issue.id, IssueStatus.in_progress, admin, None,
    ).unwrap()

    assert updated.status == IssueStatus.in_progress
    assert background.tasks == []
