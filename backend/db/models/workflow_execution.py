"""Execution log models: one row per run, optionally one per step."""

from typing import Optional

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import ExecutionStatus, TriggerType
from db.base import BaseModel


class WorkflowExecution(BaseModel):
    """Persisted summary of one workflow run.

    Attributes:
        execution_id: Run id returned to the caller
        workflow_id: Workflow that was run
        user_id: Requesting user
        trigger: manual, schedule, event or webhook
        status: completed or failed
        results: JSON map of step id to step result
        error: Top-level error for failed runs
        execution_time: Total run duration in milliseconds
        steps_completed: Steps attempted
        total_steps: Steps in the definition
    """

    __tablename__ = "workflow_executions"

    execution_id: Mapped[str] = mapped_column(nullable=False, unique=True, index=True)
    workflow_id: Mapped[str] = mapped_column(nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(nullable=False, index=True)
    trigger: Mapped[str] = mapped_column(default=TriggerType.MANUAL.value)
    status: Mapped[str] = mapped_column(default=ExecutionStatus.COMPLETED.value, index=True)
    results: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(nullable=True)
    execution_time: Mapped[int] = mapped_column(default=0)
    steps_completed: Mapped[int] = mapped_column(default=0)
    total_steps: Mapped[int] = mapped_column(default=0)
    metadata_: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)


class WorkflowStepExecution(BaseModel):
    """Result of a single step within a run."""

    __tablename__ = "workflow_step_executions"

    execution_id: Mapped[str] = mapped_column(nullable=False, index=True)
    workflow_id: Mapped[str] = mapped_column(nullable=False, index=True)
    step_id: Mapped[str] = mapped_column(nullable=False)
    success: Mapped[bool] = mapped_column(default=False)
    result: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(nullable=True)
    execution_time: Mapped[int] = mapped_column(default=0)
