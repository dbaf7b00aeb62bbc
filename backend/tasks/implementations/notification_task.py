"""Notification step.

Loads the referenced template from the workflow store, fills its subject and
content from runtime data and hands the result to the notifier for the
configured channel (email, slack or sms).
"""

from typing import Any, Dict, List, Union

from core.constants import NotificationChannel, StepType
from tasks.base_task import BaseTask, StepResult
from workflow.models import NotificationConfig
from workflow.templating import resolve_template

SUPPORTED_CHANNELS = {channel.value for channel in NotificationChannel}


def _normalize_recipients(recipients: Union[List[str], str]) -> List[str]:
    if isinstance(recipients, str):
        return [recipients] if recipients else []
    return list(recipients)


class NotificationTask(BaseTask):
    """Render a stored template and deliver it."""

    step_type = StepType.NOTIFICATION
    display_name = "Notification"
    description = "Send a templated email, Slack or SMS notification"
    config_model = NotificationConfig

    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        store = self.collaborators.store
        notifier = self.collaborators.notifier
        if store is None or notifier is None:
            return StepResult.failure("Notification collaborators not configured")

        config: NotificationConfig = step.config

        template = await store.get_notification_template(config.template)
        if template is None:
            return StepResult.failure("Notification template not found")

        if config.channel not in SUPPORTED_CHANNELS:
            return StepResult.failure(f"Unsupported notification channel: {config.channel}")

        subject = resolve_template(template.subject, data)
        content = resolve_template(template.content, data)
        recipients = _normalize_recipients(config.recipients)

        ack = await notifier.send(config.channel, recipients, subject, content)
        if not ack.success:
            return StepResult.failure(f"Notification delivery failed: {ack.error}")

        return StepResult.ok(ack.to_dict())


NOTIFICATION_TASK_TYPES = {
    StepType.NOTIFICATION: NotificationTask,
}
