"""Workflow store implementations — SQL-backed and in-memory."""

import logging
from typing import Any, Optional, Union

from sqlalchemy import select

from db.models.notification_template import NotificationTemplateModel
from db.models.workflow import AutomationWorkflow
from integrations.interfaces import WorkflowStore
from workflow.models import NotificationTemplate, WorkflowDefinition

logger = logging.getLogger(__name__)


class SqlWorkflowStore(WorkflowStore):
    """Reads workflows and notification templates through SQLAlchemy.

    Each lookup opens its own session from the factory, so concurrent runs
    never share a session.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def get_workflow(self, workflow_id: str) -> Optional[WorkflowDefinition]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AutomationWorkflow).where(
                    AutomationWorkflow.id == workflow_id,
                    AutomationWorkflow.is_active == True,  # noqa: E712
                )
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None
        return WorkflowDefinition.from_dict({
            "id": row.id,
            "name": row.name,
            "steps": row.steps or [],
        })

    async def get_notification_template(self, template_id: str) -> Optional[NotificationTemplate]:
        async with self._session_factory() as session:
            row = await session.get(NotificationTemplateModel, template_id)

        if row is None:
            return None
        return NotificationTemplate(id=row.id, subject=row.subject, content=row.content)

    async def save_workflow(
        self,
        workflow_id: str,
        steps: list[dict[str, Any]],
        name: str = "",
        description: str = "",
        is_active: bool = True,
    ) -> None:
        """Insert or replace a workflow definition row."""
        async with self._session_factory() as session:
            row = await session.get(AutomationWorkflow, workflow_id)
            if row is None:
                row = AutomationWorkflow(id=workflow_id)
                session.add(row)
            row.name = name
            row.description = description
            row.steps = steps
            row.is_active = is_active
            await session.commit()
        logger.info(f"Workflow saved: {workflow_id} ({len(steps)} steps)")

    async def save_notification_template(
        self,
        template_id: str,
        subject: str,
        content: str,
        name: str = "",
    ) -> None:
        """Insert or replace a notification template row."""
        async with self._session_factory() as session:
            row = await session.get(NotificationTemplateModel, template_id)
            if row is None:
                row = NotificationTemplateModel(id=template_id)
                session.add(row)
            row.name = name
            row.subject = subject
            row.content = content
            await session.commit()


class InMemoryWorkflowStore(WorkflowStore):
    """Dict-backed store for tests and local runs."""

    def __init__(self):
        self._workflows: dict[str, WorkflowDefinition] = {}
        self._templates: dict[str, NotificationTemplate] = {}

    def add_workflow(self, definition: Union[WorkflowDefinition, dict]) -> WorkflowDefinition:
        if isinstance(definition, dict):
            definition = WorkflowDefinition.from_dict(definition)
        self._workflows[definition.id] = definition
        return definition

    def add_template(self, template_id: str, subject: str = "", content: str = "") -> NotificationTemplate:
        template = NotificationTemplate(id=template_id, subject=subject, content=content)
        self._templates[template_id] = template
        return template

    async def get_workflow(self, workflow_id: str) -> Optional[WorkflowDefinition]:
        return self._workflows.get(workflow_id)

    async def get_notification_template(self, template_id: str) -> Optional[NotificationTemplate]:
        return self._templates.get(template_id)
