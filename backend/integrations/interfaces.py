"""Collaborator interfaces consumed by the workflow engine.

The engine and step executors only talk to these abstractions; concrete
implementations (SQL store, httpx clients, notification manager) are wired in
``app.dependencies`` and fakes are used in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from workflow.models import NotificationTemplate, WorkflowDefinition


@dataclass
class HttpResponse:
    """Response returned by an HttpClient call."""
    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class DeliveryAck:
    """Outcome of a notifier send."""
    success: bool
    channel: str
    recipients: list[str] = field(default_factory=list)
    message: str = ""
    error: Optional[str] = None
    delivered_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "sent": self.success,
            "channel": self.channel,
            "recipients": self.recipients,
            "message": self.message,
            "deliveredAt": self.delivered_at,
        }


class WorkflowStore(ABC):
    """Source of workflow definitions and notification templates."""

    @abstractmethod
    async def get_workflow(self, workflow_id: str) -> Optional[WorkflowDefinition]:
        """Return the definition, or None if it does not exist."""
        ...

    @abstractmethod
    async def get_notification_template(self, template_id: str) -> Optional[NotificationTemplate]:
        """Return the template, or None if it does not exist."""
        ...


class TextCompletionService(ABC):
    """Opaque AI completion capability used by ai_processing steps."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        use_case: Optional[str],
        user_id: Optional[str],
        provider_hint: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Return the completion payload.

        Raises:
            CompletionError: the service answered with a non-success status
        """
        ...


class Notifier(ABC):
    """Delivers a rendered notification through a named channel."""

    @abstractmethod
    async def send(
        self,
        channel: str,
        recipients: list[str],
        subject: str,
        content: str,
    ) -> DeliveryAck:
        ...


class HttpClient(ABC):
    """Outbound HTTP used by api_call steps."""

    @abstractmethod
    async def call(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        ...


class ExecutionLogSink(ABC):
    """Append-only store for execution records."""

    @abstractmethod
    async def append(self, record: dict[str, Any]) -> None:
        ...

    async def append_step(self, entry: dict[str, Any]) -> None:
        """Persist a single step result. Sinks without step storage ignore it."""
        return None
