"""Notification channel implementations.

Each channel handles delivery for one transport (email, Slack, SMS).
The NotificationManager dispatches to the appropriate channel.
"""

import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.mime.text import MIMEText
from typing import Optional

import httpx

from core.constants import NotificationChannel
from integrations.interfaces import DeliveryAck

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """A rendered notification to be delivered."""
    channel: NotificationChannel
    recipients: list[str]
    subject: str
    content: str
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def _delivered(channel: NotificationChannel, recipients: list[str], message: str) -> DeliveryAck:
    return DeliveryAck(
        success=True,
        channel=channel.value,
        recipients=recipients,
        message=message,
        delivered_at=datetime.now(timezone.utc).isoformat(),
    )


def _failed(channel: NotificationChannel, recipients: list[str], error: str) -> DeliveryAck:
    return DeliveryAck(success=False, channel=channel.value, recipients=recipients, error=error)


# ─── Base Channel ──────────────────────────────────────────────

class BaseChannel(ABC):
    """Abstract base for notification channels."""

    channel_type: NotificationChannel

    @abstractmethod
    async def send(self, notification: Notification) -> DeliveryAck:
        """Send a notification through this channel."""
        ...

    @abstractmethod
    def validate_config(self, config: dict) -> tuple[bool, Optional[str]]:
        """Validate channel-specific configuration."""
        ...


# ─── Email Channel ─────────────────────────────────────────────

class EmailChannel(BaseChannel):
    """Send notifications via SMTP email.

    Config:
        smtp_host, smtp_port, smtp_user, smtp_password,
        from_address, use_tls
    """

    channel_type = NotificationChannel.EMAIL

    def __init__(self, config: dict = None):
        self.config = config or {}

    async def send(self, notification: Notification) -> DeliveryAck:
        if not notification.recipients:
            return _failed(self.channel_type, [], "No email recipients")
        try:
            from_addr = self.config.get("from_address", "workflows@localhost")

            msg = MIMEText(notification.content, "plain")
            msg["Subject"] = notification.subject
            msg["From"] = from_addr
            msg["To"] = ", ".join(notification.recipients)

            # smtplib is blocking; keep it off the event loop
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                lambda: self._send_smtp(from_addr, notification.recipients, msg),
            )
            return _delivered(self.channel_type, notification.recipients, "Email sent")

        except Exception as e:
            logger.error(f"Email send failed: {e}")
            return _failed(self.channel_type, notification.recipients, str(e))

    def _send_smtp(self, from_addr: str, to_addrs: list[str], msg: MIMEText) -> None:
        """Synchronous SMTP send."""
        with smtplib.SMTP(self.config.get("smtp_host", "localhost"), self.config.get("smtp_port", 587)) as server:
            if self.config.get("use_tls", True):
                server.starttls()
            user = self.config.get("smtp_user")
            password = self.config.get("smtp_password")
            if user and password:
                server.login(user, password)
            server.sendmail(from_addr, to_addrs, msg.as_string())

    def validate_config(self, config: dict) -> tuple[bool, Optional[str]]:
        if not config.get("smtp_host"):
            return False, "Missing smtp_host"
        return True, None


# ─── Slack Channel ─────────────────────────────────────────────

class SlackChannel(BaseChannel):
    """Post notifications to Slack through an incoming webhook.

    Recipients are Slack channel names; with none, the webhook's default
    channel is used.
    """

    channel_type = NotificationChannel.SLACK

    def __init__(self, config: dict = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or {}
        self._transport = transport

    async def send(self, notification: Notification) -> DeliveryAck:
        webhook_url = self.config.get("webhook_url")
        if not webhook_url:
            return _failed(self.channel_type, notification.recipients, "No Slack webhook URL configured")

        targets = notification.recipients or [None]
        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as client:
                for target in targets:
                    payload = {
                        "text": notification.content,
                        "blocks": [
                            {
                                "type": "section",
                                "text": {"type": "mrkdwn", "text": notification.content},
                            },
                        ],
                    }
                    if notification.subject:
                        payload["blocks"].insert(0, {
                            "type": "header",
                            "text": {"type": "plain_text", "text": notification.subject},
                        })
                    if target:
                        payload["channel"] = target
                    response = await client.post(webhook_url, json=payload)
                    response.raise_for_status()

            return _delivered(self.channel_type, notification.recipients, "Slack message sent")

        except Exception as e:
            logger.error(f"Slack send failed: {e}")
            return _failed(self.channel_type, notification.recipients, str(e))

    def validate_config(self, config: dict) -> tuple[bool, Optional[str]]:
        if not config.get("webhook_url"):
            return False, "Missing webhook_url"
        return True, None


# ─── SMS Channel ──────────────────────────────────────────────

class SmsChannel(BaseChannel):
    """Send text messages through an HTTP SMS gateway.

    Config:
        gateway_url: Endpoint accepting {"to": [...], "body": "..."}
        token: Optional bearer token
    """

    channel_type = NotificationChannel.SMS

    def __init__(self, config: dict = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or {}
        self._transport = transport

    async def send(self, notification: Notification) -> DeliveryAck:
        gateway_url = self.config.get("gateway_url")
        if not gateway_url:
            return _failed(self.channel_type, notification.recipients, "No SMS gateway configured")
        if not notification.recipients:
            return _failed(self.channel_type, [], "No SMS recipients")

        headers = {"Content-Type": "application/json"}
        if self.config.get("token"):
            headers["Authorization"] = f"Bearer {self.config['token']}"

        try:
            async with httpx.AsyncClient(timeout=15, transport=self._transport) as client:
                response = await client.post(
                    gateway_url,
                    json={"to": notification.recipients, "body": notification.content},
                    headers=headers,
                )
                response.raise_for_status()

            return _delivered(
                self.channel_type,
                notification.recipients,
                f"SMS accepted (HTTP {response.status_code})",
            )

        except Exception as e:
            logger.error(f"SMS send failed: {e}")
            return _failed(self.channel_type, notification.recipients, str(e))

    def validate_config(self, config: dict) -> tuple[bool, Optional[str]]:
        if not config.get("gateway_url"):
            return False, "Missing gateway_url"
        return True, None
