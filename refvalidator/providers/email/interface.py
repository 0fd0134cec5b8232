"""
Abstract interface for email providers.

All email providers (Resend, SendGrid, SES, ...) must implement this
interface to be registered under the "email" category.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ...models import EmailData, EmailDeliveryStatus


class EmailProviderInterface(ABC):
    """Sends reference requests and reminders to a single address."""

    @abstractmethod
    async def send_email(self, to: str, subject: str, content: str) -> str:
        """
        Send a raw email.

        Returns:
            Provider message id usable with get_delivery_status()
        """
        pass

    @abstractmethod
    async def send_template(self, email: EmailData) -> str:
        """
        Send an email rendered from a named template.

        Returns:
            Provider message id
        """
        pass

    @abstractmethod
    async def verify_email(self, email: str) -> bool:
        """Check whether an address is deliverable."""
        pass

    @abstractmethod
    async def get_delivery_status(self, message_id: str) -> EmailDeliveryStatus:
        """Get the delivery status of a sent message."""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'mock', 'resend')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider can send mail."""
        pass
