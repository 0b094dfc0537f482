import uuid

from nagarconnect.core.errors import AuthenticationRequired, NotFound
from nagarconnect.models.issue import IssueCategory, IssueStatus
from nagarconnect.models.notification import Notification
from nagarconnect.schemas.issue_schemas import FeedbackCreateSchema, IssueCreateSchema
from nagarconnect.services.issue_store import IssueStore
from nagarconnect.tests.helpers import create_issue, create_user
from sqlmodel import select


def test_create_issue_starts_submitted_with_zero_upvotes(db):
    user = create_user(db)
    payload = IssueCreateSchema(
        title="  Pothole on MG Road ",
        category=IssueCategory.roads,
        latitude=28.61,
        longitude=77.21,
    )

    issue = IssueStore(db).create_issue(user, payload).unwrap()

    assert issue.title == "Pothole on MG Road"
    assert issue.status == IssueStatus.submitted
    assert issue.upvotes == 0
    assert issue.resolved_at is None
    assert issue.user_email == user.email


def test_create_issue_writes_submission_notice(db):
    user = create_user(db)
    issue = IssueStore(db).create_issue(user, IssueCreateSchema(title="Broken streetlight")).unwrap()

    notices = db.exec(select(Notification).where(Notification.user_id == user.id)).all()
    assert len(notices) == 1
    assert notices[0].issue_id == issue.id
    assert notices[0].title_en == "Issue Submitted"
    assert "Broken streetlight" in notices[0].message_en


def test_create_issue_requires_user(db):
    outcome = IssueStore(db).create_issue(None, IssueCreateSchema(title="Garbage pile"))

    assert not outcome.is_ok
    assert isinstance(outcome.error, AuthenticationRequired)


def test_list_issues_newest_first(db):
    user = create_user(db)
    first = create_issue(db, user, title="First")
    second = create_issue(db, user, title="Second")

    issues = IssueStore(db).list_issues().unwrap()

    assert [i.id for i in issues] == [second.id, first.id]


def test_list_user_issues_only_returns_own(db):
    alice = create_user(db, "alice@example.com")
    bob = create_user(db, "bob@example.com")
    create_issue(db, alice, title="Alice's issue")
    create_issue(db, bob, title="Bob's issue")

    issues = IssueStore(db).list_user_issues(alice.id).unwrap()

    assert [i.title for i in issues] == ["Alice's issue"]


def test_get_missing_issue_is_not_found(db):
    outcome = IssueStore(db).get_issue(uuid.uuid4())

    assert isinstance(outcome.error, NotFound)


def test_stats_counts_pending_and_resolved(db):
    user = create_user(db)
    create_issue(db, user, title="a")
    create_issue(db, user, title="b", status=IssueStatus.in_progress)
    create_issue(db, user, title="c", status=IssueStatus.resolved)

    stats = IssueStore(db).stats().unwrap()

    assert stats.total == 3
    assert stats.pending == 2
    assert stats.resolved == 1


def test_map_markers_skip_issues_without_location(db):
    user = create_user(db)
    create_issue(db, user, title="located", latitude=28.6, longitude=77.2)
    create_issue(db, user, title="unlocated")

    markers = IssueStore(db).map_markers("hi").unwrap()

    assert len(markers) == 1
    assert markers[0].title == "located"
    assert markers[0].status_label == "सबमिट किया गया"
    assert markers[0].color == "#3b82f6"


def test_feedback_for_missing_issue_is_not_found(db):
    user = create_user(db)

    outcome = IssueStore(db).add_feedback(uuid.uuid4(), user, FeedbackCreateSchema(rating=4))

    assert isinstance(outcome.error, NotFound)
