"""
Base class for email providers
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Union


class EmailDeliveryError(Exception):
    """The provider did not accept the message."""


class EmailProvider(ABC):
    """Abstract base class for email providers"""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is available/configured"""

    @abstractmethod
    def send_email(
        self,
        to: Union[str, List[str]],
        subject: str,
        html: str,
        sender: Optional[str] = None,
    ) -> str:
        """
        Send an email

        Args:
            to: Email address or list of addresses
            subject: Email subject
            html: HTML content of the email
            sender: Sender address (optional, uses the provider default)

        Returns:
            str: provider-assigned message id

        Raises:
            EmailDeliveryError: the provider rejected or could not be reached
        """
