"""Notification Manager — dispatches rendered notifications to channels.

Implements the Notifier collaborator used by notification steps.
"""

import logging

from core.constants import NotificationChannel
from integrations.interfaces import DeliveryAck, Notifier
from notifications.channels import (
    BaseChannel,
    EmailChannel,
    Notification,
    SlackChannel,
    SmsChannel,
)

logger = logging.getLogger(__name__)


class NotificationManager(Notifier):
    """Central notification dispatcher.

    Manages channel registration and routes each send to the channel
    named by the step.
    """

    def __init__(self):
        self._channels: dict[NotificationChannel, BaseChannel] = {}

    def register_channel(self, channel: BaseChannel) -> None:
        """Register a notification channel."""
        self._channels[channel.channel_type] = channel
        logger.info(f"Notification channel registered: {channel.channel_type.value}")

    def configure_channels(self, config: dict) -> None:
        """Configure channels from app settings.

        Channels whose config fails validation are skipped with a warning.

        Args:
            config: Dict with channel configs:
                {
                    "email": {"smtp_host": ..., "smtp_port": ...},
                    "slack": {"webhook_url": ...},
                    "sms": {"gateway_url": ..., "token": ...},
                }
        """
        for name, channel_cls in (
            ("email", EmailChannel),
            ("slack", SlackChannel),
            ("sms", SmsChannel),
        ):
            if name not in config:
                continue
            channel = channel_cls(config[name])
            valid, error = channel.validate_config(config[name])
            if not valid:
                logger.warning(f"Notification channel {name} not registered: {error}")
                continue
            self.register_channel(channel)

    @property
    def configured_channels(self) -> list[str]:
        return [channel.value for channel in self._channels]

    async def send(
        self,
        channel: str,
        recipients: list[str],
        subject: str,
        content: str,
    ) -> DeliveryAck:
        """Send a notification through the named channel."""
        try:
            channel_type = NotificationChannel(channel)
        except ValueError:
            return DeliveryAck(
                success=False,
                channel=channel,
                recipients=recipients,
                error=f"Unsupported notification channel: {channel}",
            )

        handler = self._channels.get(channel_type)
        if not handler:
            return DeliveryAck(
                success=False,
                channel=channel,
                recipients=recipients,
                error=f"Channel not configured: {channel}",
            )

        result = await handler.send(Notification(
            channel=channel_type,
            recipients=recipients,
            subject=subject,
            content=content,
        ))

        if result.success:
            logger.info(f"Notification sent via {channel} to {', '.join(recipients) or 'default'}")
        else:
            logger.warning(f"Notification failed via {channel}: {result.error}")

        return result
