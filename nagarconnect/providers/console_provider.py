"""
Console email provider for development/testing
Logs emails instead of sending them
"""
import logging
import uuid

from nagarconnect.providers.base import EmailProvider

logger = logging.getLogger(__name__)


class ConsoleEmailProvider(EmailProvider):
    """Provider that logs emails (used when no provider key is configured)"""

    def __init__(self, default_sender: str):
        self.default_sender = default_sender

    def is_available(self) -> bool:
        return True

    def send_email(self, to, subject, html, sender=None) -> str:
        message_id = f"console-{uuid.uuid4()}"
        logger.info(
            "[EMAIL CONSOLE] not sent",
            extra={
                "email_id": message_id,
                "from": sender or self.default_sender,
                "to": to,
                "subject": subject,
                "html_length": len(html),
            },
        )
        return message_id
