import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from nagarconnect import i18n
from nagarconnect.core.errors import AuthenticationRequired, NotFound
from nagarconnect.core.result import returns_outcome
from nagarconnect.models.feedback import Feedback
from nagarconnect.models.issue import Issue, IssueStatus
from nagarconnect.models.notification import Notification
from nagarconnect.models.user import User
from nagarconnect.schemas.issue_schemas import (
    FeedbackCreateSchema,
    IssueCreateSchema,
    IssueStats,
    MapMarker,
)

logger = logging.getLogger(__name__)

PENDING_STATUSES = (
    IssueStatus.submitted,
    IssueStatus.acknowledged,
    IssueStatus.in_progress,
)


class IssueStore:
    """Reads and writes on the ``issues`` table."""

    def __init__(self, session: Session):
        self.session = session

    @returns_outcome
    def list_issues(self) -> List[Issue]:
        return list(self.session.exec(
            select(Issue).order_by(Issue.created_at.desc())
        ).all())

    @returns_outcome
    def list_user_issues(self, user_id: uuid.UUID) -> List[Issue]:
        return list(self.session.exec(
            select(Issue)
            .where(Issue.user_id == user_id)
            .order_by(Issue.created_at.desc())
        ).all())

    @returns_outcome
    def get_issue(self, issue_id: uuid.UUID) -> Issue:
        issue = self.session.get(Issue, issue_id)
        if not issue:
            raise NotFound("issue_not_found")
        return issue

    @returns_outcome
    def create_issue(self, user: Optional[User], payload: IssueCreateSchema) -> Issue:
        if user is None:
            raise AuthenticationRequired()

        issue = Issue(
            user_id=user.id,
            user_email=user.email,
            user_phone=payload.user_phone or user.phone,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            latitude=payload.latitude,
            longitude=payload.longitude,
            address=payload.address,
            photo_url=payload.photo_url,
            status=IssueStatus.submitted,
            upvotes=0,
        )
        self.session.add(issue)
        self.session.commit()
        self.session.refresh(issue)

        logger.info("issue %s submitted by %s", issue.id, user.id)
        self._notify_submitted(issue)
        return issue

    @returns_outcome
    def add_feedback(self, issue_id: uuid.UUID, user: User, payload: FeedbackCreateSchema) -> Feedback:
        if not self.session.get(Issue, issue_id):
            raise NotFound("issue_not_found")

        feedback = Feedback(
            issue_id=issue_id,
            user_id=user.id,
            rating=payload.rating,
            comment=payload.comment,
        )
        self.session.add(feedback)
        self.session.commit()
        self.session.refresh(feedback)
        return feedback

    @returns_outcome
    def stats(self) -> IssueStats:
        now = datetime.now(timezone.utc)
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        total, pending, resolved, today = self.session.exec(
            select(
                func.count(Issue.id),
                func.count().filter(Issue.status.in_(PENDING_STATUSES)),
                func.count().filter(Issue.status == IssueStatus.resolved),
                func.count().filter(Issue.created_at >= day_start),
            )
        ).one()

        return IssueStats(total=total, pending=pending, resolved=resolved, today=today)

    @returns_outcome
    def map_markers(self, language: str) -> List[MapMarker]:
        issues = self.session.exec(
            select(Issue)
            .where(Issue.latitude.is_not(None), Issue.longitude.is_not(None))
            .order_by(Issue.created_at.desc())
        ).all()

        return [
            MapMarker(
                id=issue.id,
                latitude=issue.latitude,
                longitude=issue.longitude,
                color=i18n.status_color(issue.status.value),
                title=issue.title,
                description=issue.description,
                status=issue.status,
                status_label=i18n.status_label(issue.status.value, language),
                category=issue.category,
                category_label=i18n.category_label(issue.category.value, language),
                upvotes=issue.upvotes,
            )
            for issue in issues
        ]

    def _notify_submitted(self, issue: Issue) -> None:
        template = i18n.SUBMITTED_NOTIFICATION
        notification = Notification(
            user_id=issue.user_id,
            issue_id=issue.id,
            title_en=template["title"]["en"],
            title_hi=template["title"]["hi"],
            message_en=template["message"]["en"].format(title=issue.title),
            message_hi=template["message"]["hi"].format(title=issue.title),
        )
        try:
            self.session.add(notification)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("could not record submission notice for issue %s", issue.id)
