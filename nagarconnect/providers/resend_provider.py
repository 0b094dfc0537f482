"""
Resend email provider (https://resend.com) over its HTTP API
"""
import logging

import httpx

from nagarconnect.providers.base import EmailDeliveryError, EmailProvider

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailProvider(EmailProvider):
    def __init__(self, api_key: str, default_sender: str, timeout: float = 10.0, transport=None):
        self.api_key = api_key
        self.default_sender = default_sender
        self.timeout = timeout
        self.transport = transport

    def is_available(self) -> bool:
        return bool(self.api_key)

    def send_email(self, to, subject, html, sender=None) -> str:
        recipients = [to] if isinstance(to, str) else list(to)
        body = {
            "from": sender or self.default_sender,
            "to": recipients,
            "subject": subject,
            "html": html,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    RESEND_API_URL,
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
            message_id = response.json().get("id")
        except httpx.HTTPError as exc:
            logger.error("Resend rejected email to %s: %s", recipients, exc)
            raise EmailDeliveryError(str(exc)) from exc
        except (ValueError, AttributeError) as exc:
            logger.error("Resend returned an unreadable reply for %s: %s", recipients, exc)
            raise EmailDeliveryError("unreadable response from Resend") from exc

        logger.info("Email sent via Resend to %s: %s (%s)", recipients, subject, message_id)
        return message_id
