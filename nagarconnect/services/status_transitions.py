import logging
import uuid
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from nagarconnect import i18n
from nagarconnect.core.result import returns_outcome
from nagarconnect.db import procedures
from nagarconnect.models.issue import Issue, IssueStatus
from nagarconnect.models.notification import Notification
from nagarconnect.models.user import User
from nagarconnect.services.dispatch_client import NotificationDispatcherClient

logger = logging.getLogger(__name__)


class StatusTransitionHandler:
    """Privileged status change followed by in-app and email notices.

    Only the status write can fail the call. The in-app notice and the email
    are best effort and are never rolled back against the status change.
    """

    def __init__(
        self,
        session: Session,
        dispatcher: Optional[NotificationDispatcherClient],
        background: Optional[BackgroundTasks] = None,
    ):
        self.session = session
        self.dispatcher = dispatcher
        self.background = background

    @returns_outcome
    def transition(
        self,
        issue_id: uuid.UUID,
        target_status: IssueStatus,
        caller: User,
        token: Optional[str],
        language: Optional[str] = None,
    ) -> Issue:
        current = self.session.get(Issue, issue_id)
        old_status = current.status if current else None

        issue = procedures.admin_update_issue_status(
            self.session, caller.id, issue_id, target_status,
        )
        logger.info(
            "issue %s moved %s -> %s by %s",
            issue.id, old_status.value if old_status else None, issue.status.value, caller.id,
        )

        self._notify_in_app(issue)
        self._schedule_email(issue, old_status, token, language)

        self.session.refresh(issue)
        return issue

    def _notify_in_app(self, issue: Issue) -> None:
        template = i18n.STATUS_NOTIFICATIONS.get(issue.status.value)
        if not template:
            return

        notification = Notification(
            user_id=issue.user_id,
            issue_id=issue.id,
            title_en=template["title"]["en"],
            title_hi=template["title"]["hi"],
            message_en=template["message"]["en"],
            message_hi=template["message"]["hi"],
        )
        try:
            self.session.add(notification)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("in-app notice for issue %s was not recorded", issue.id)

    def _schedule_email(
        self,
        issue: Issue,
        old_status: Optional[IssueStatus],
        token: Optional[str],
        language: Optional[str],
    ) -> None:
        if self.dispatcher is None or not token:
            logger.warning("no dispatcher or credential; email for issue %s skipped", issue.id)
            return

        if language is None:
            reporter = self.session.get(User, issue.user_id)
            language = reporter.language.value if reporter else i18n.DEFAULT_LANGUAGE

        payload = {
            "issueId": str(issue.id),
            "userEmail": issue.user_email,
            "issueTitle": issue.title,
            "oldStatus": old_status.value if old_status else None,
            "newStatus": issue.status.value,
            "language": i18n.normalize_language(language),
        }

        if self.background is not None:
            self.background.add_task(self.dispatcher.send, payload, token)
        else:
            logger.warning("no background runner; email for issue %s skipped", issue.id)
