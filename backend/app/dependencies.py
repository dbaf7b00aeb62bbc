"""FastAPI dependency injection functions and collaborator wiring."""

from typing import Optional

from app.config import Settings, get_settings
from integrations.ai_processor import AIProcessorClient
from integrations.http_client import HttpxClient
from notifications.manager import NotificationManager
from services.execution_log import SqlExecutionLogSink
from services.workflow_store import SqlWorkflowStore
from tasks.base_task import Collaborators
from tasks.registry import TaskRegistry
from workflow.engine import WorkflowEngine
from workflow.recorder import ExecutionRecorder


def build_workflow_engine(settings: Settings, session_factory) -> WorkflowEngine:
    """Assemble the engine and its collaborators from settings."""
    store = SqlWorkflowStore(session_factory)

    notifier = NotificationManager()
    notifier.configure_channels(settings.notification_channel_config())

    collaborators = Collaborators(
        store=store,
        completion=AIProcessorClient(
            url=settings.AI_PROCESSOR_URL,
            api_key=settings.AI_PROCESSOR_API_KEY,
            timeout=settings.AI_PROCESSOR_TIMEOUT,
        ),
        notifier=notifier,
        http=HttpxClient(default_timeout=settings.HTTP_DEFAULT_TIMEOUT),
    )
    registry = TaskRegistry(
        collaborators,
        enforce_timeouts=settings.ENFORCE_STEP_TIMEOUTS,
        default_timeout=settings.DEFAULT_STEP_TIMEOUT,
    )
    recorder = ExecutionRecorder(
        SqlExecutionLogSink(session_factory),
        record_steps=settings.RECORD_STEP_RESULTS,
    )
    return WorkflowEngine(
        store=store,
        registry=registry,
        recorder=recorder,
        dependency_ordering=settings.DEPENDENCY_ORDERED_EXECUTION,
    )


# Singleton
_engine: Optional[WorkflowEngine] = None


def get_workflow_engine() -> WorkflowEngine:
    """Get or create the singleton WorkflowEngine."""
    global _engine
    if _engine is None:
        from db.database import AsyncSessionLocal

        _engine = build_workflow_engine(get_settings(), AsyncSessionLocal)
    return _engine
