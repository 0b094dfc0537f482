import logging
import uuid
from typing import Optional

from sqlmodel import Session, select

from nagarconnect.core.errors import AuthenticationRequired, NotFound
from nagarconnect.core.result import returns_outcome
from nagarconnect.models.issue import Issue
from nagarconnect.models.upvote import IssueUpvote
from nagarconnect.models.user import User
from nagarconnect.schemas.issue_schemas import UpvoteResult

logger = logging.getLogger(__name__)


class UpvoteCoordinator:
    """Toggles a user's upvote and keeps ``Issue.upvotes`` in step.

    The relation row and the counter are written in one transaction, and the
    counter moves by a SQL-side ``upvotes +/- 1`` so concurrent toggles by
    different users never overwrite each other.
    """

    def __init__(self, session: Session):
        self.session = session

    @returns_outcome
    def toggle(self, issue_id: uuid.UUID, user: Optional[User]) -> UpvoteResult:
        if user is None:
            raise AuthenticationRequired()

        issue = self.session.get(Issue, issue_id)
        if not issue:
            raise NotFound("issue_not_found")

        existing = self.session.exec(
            select(IssueUpvote).where(
                IssueUpvote.issue_id == issue_id,
                IssueUpvote.user_id == user.id,
            )
        ).first()

        if existing:
            self.session.delete(existing)
            issue.upvotes = Issue.upvotes - 1
            upvoted = False
        else:
            self.session.add(IssueUpvote(issue_id=issue_id, user_id=user.id))
            issue.upvotes = Issue.upvotes + 1
            upvoted = True

        self.session.add(issue)
        self.session.commit()
        self.session.refresh(issue)

        logger.info(
            "user %s %s issue %s (now %d)",
            user.id, "upvoted" if upvoted else "withdrew upvote on", issue_id, issue.upvotes,
        )
        return UpvoteResult(issue_id=issue_id, upvoted=upvoted, upvotes=issue.upvotes)
