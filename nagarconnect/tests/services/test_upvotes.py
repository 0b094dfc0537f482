import uuid

from sqlmodel import func, select

from nagarconnect.core.errors import AuthenticationRequired, NotFound
from nagarconnect.models.upvote import IssueUpvote
from nagarconnect.services.upvotes import UpvoteCoordinator
from nagarconnect.tests.helpers import create_issue, create_user


def count_rows(db, issue_id):
    return db.exec(
        select(func.count(IssueUpvote.id)).where(IssueUpvote.issue_id == issue_id)
    ).one()


def test_toggle_adds_then_removes(db):
    user = create_user(db)
    issue = create_issue(db, user)
    coordinator = UpvoteCoordinator(db)

    first = coordinator.toggle(issue.id, user).unwrap()
    assert first.upvoted is True
    assert first.upvotes == 1
    assert count_rows(db, issue.id) == 1

    second = coordinator.toggle(issue.id, user).unwrap()
    assert second.upvoted is False
    assert second.upvotes == 0
    assert count_rows(db, issue.id) == 0


def test_two_users_each_count_once(db):
    reporter = create_user(db, "reporter@example.com")
    alice = create_user(db, "alice@example.com")
    bob = create_user(db, "bob@example.com")
    issue = create_issue(db, reporter)

    coordinator = UpvoteCoordinator(db)
    coordinator.toggle(issue.id, alice).unwrap()
    result = coordinator.toggle(issue.id, bob).unwrap()

    assert result.upvotes == 2
    assert count_rows(db, issue.id) == 2


def test_counter_matches_rows_after_mixed_toggles(db):
    reporter = create_user(db, "reporter@example.com")
    voters = [create_user(db, f"voter{i}@example.com") for i in range(3)]
    issue = create_issue(db, reporter)
    coordinator = UpvoteCoordinator(db)

    for voter in voters:
        coordinator.toggle(issue.id, voter)
    coordinator.toggle(issue.id, voters[1])

    db.refresh(issue)
    assert issue.upvotes == count_rows(db, issue.id) == 2


def test_anonymous_toggle_is_rejected(db):
    user = create_user(db)
    issue = create_issue(db, user)

    outcome = UpvoteCoordinator(db).toggle(issue.id, None)

    assert isinstance(outcome.error, AuthenticationRequired)
    db.refresh(issue)
    assert issue.upvotes == 0


def test_toggle_on_missing_issue(db):
    user = create_user(db)

    outcome = UpvoteCoordinator(db).toggle(uuid.uuid4(), user)

    assert isinstance(outcome.error, NotFound)
