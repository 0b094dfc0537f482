"""
Email providers for NagarConnect
"""
from nagarconnect.core.config import Settings
from nagarconnect.providers.base import EmailDeliveryError, EmailProvider
from nagarconnect.providers.console_provider import ConsoleEmailProvider
from nagarconnect.providers.resend_provider import ResendEmailProvider

__all__ = [
    'EmailDeliveryError',
    'EmailProvider',
    'ConsoleEmailProvider',
    'ResendEmailProvider',
    'get_email_provider',
]


def get_email_provider(settings: Settings) -> EmailProvider:
    """Resend when a server-side key is configured, console otherwise."""
    if settings.resend_api_key:
        return ResendEmailProvider(settings.resend_api_key, settings.email_from)
    return ConsoleEmailProvider(settings.email_from)
