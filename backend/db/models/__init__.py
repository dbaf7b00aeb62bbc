"""Database models for the workflow orchestrator.

This module imports all models to ensure they are registered
with SQLAlchemy's declarative base.
"""

from db.models.notification_template import NotificationTemplateModel
from db.models.workflow import AutomationWorkflow
from db.models.workflow_execution import WorkflowExecution, WorkflowStepExecution

__all__ = [
    "AutomationWorkflow",
    "NotificationTemplateModel",
    "WorkflowExecution",
    "WorkflowStepExecution",
]
