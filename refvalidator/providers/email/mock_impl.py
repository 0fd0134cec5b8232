"""
Mock Email Provider implementation.

Keeps every message in an in-memory outbox instead of sending it.
Messages are "delivered" the moment they are queued.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ...config import get_logger
from ...models import DeliveryStatus, EmailData, EmailDeliveryStatus, utc_now
from .interface import EmailProviderInterface

logger = get_logger("email.mock")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")

TEMPLATE_SUBJECTS: Dict[str, str] = {
    "reference_request": "Reference request for {candidate_name}",
    "reference_reminder": "Reminder: reference request for {candidate_name}",
    "reference_completed": "Your reference from {referee_name} is complete",
}


@dataclass
class SentEmail:
    """A message captured by the mock outbox."""
    message_id: str
    to: str
    subject: str
    content: str
    template: Optional[str] = None
    sent_at: datetime = field(default_factory=utc_now)


class _TemplateValues(dict):
    def __missing__(self, key: str) -> str:
        return ""


class MockEmailProvider(EmailProviderInterface):

    def __init__(self):
        self._outbox: Dict[str, SentEmail] = {}

    async def send_email(self, to: str, subject: str, content: str) -> str:
        return self._queue(to, subject, content)

    async def send_template(self, email: EmailData) -> str:
        values = _TemplateValues(email.data)
        subject = TEMPLATE_SUBJECTS.get(email.template, email.template.replace("_", " ").title())
        content = "\n".join(f"{key}: {value}" for key, value in email.data.items())
        return self._queue(
            email.to,
            subject.format_map(values).strip(),
            content,
            template=email.template,
        )

    async def verify_email(self, email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email.strip()))

    async def get_delivery_status(self, message_id: str) -> EmailDeliveryStatus:
        sent = self._outbox.get(message_id)
        if sent is None:
            return EmailDeliveryStatus(
                message_id=message_id,
                status=DeliveryStatus.FAILED,
                error="Unknown message id",
            )
        return EmailDeliveryStatus(
            message_id=message_id,
            status=DeliveryStatus.DELIVERED,
            delivered_at=sent.sent_at,
        )

    def _queue(self, to: str, subject: str, content: str, template: Optional[str] = None) -> str:
        message_id = uuid.uuid4().hex
        self._outbox[message_id] = SentEmail(
            message_id=message_id,
            to=to,
            subject=subject,
            content=content,
            template=template,
        )
        logger.info("Mock email queued | id=%s | template=%s", message_id, template or "-")
        return message_id

    # =========================================================================
    # Mock-specific helpers
    # =========================================================================

    @property
    def outbox(self) -> List[SentEmail]:
        return list(self._outbox.values())

    def clear_outbox(self) -> None:
        self._outbox.clear()

    def get_provider_name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True
