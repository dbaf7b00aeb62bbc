"""Run request and execution record types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from core.constants import ExecutionStatus, TriggerType
from core.exceptions import ValidationError
from core.utils import utc_now
from tasks.base_task import StepResult


@dataclass
class RunRequest:
    """One submission of a workflow against an input payload."""

    workflow_id: str
    user_id: str
    trigger: TriggerType = TriggerType.MANUAL
    data: Any = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ValidationError when the request cannot start a run."""
        if not isinstance(self.workflow_id, str) or not self.workflow_id.strip():
            raise ValidationError("workflowId is required")
        if not isinstance(self.user_id, str) or not self.user_id.strip():
            raise ValidationError("userId is required")
        try:
            self.trigger = TriggerType(self.trigger)
        except ValueError:
            raise ValidationError(f"Unsupported trigger: {self.trigger}")
        if self.metadata is None:
            self.metadata = {}
        if not isinstance(self.metadata, dict):
            raise ValidationError("metadata must be an object")


@dataclass
class ExecutionRecord:
    """Bookkeeping for one run. Created at run start, finalized at run end."""

    workflow_id: str
    user_id: str
    trigger: TriggerType = TriggerType.MANUAL
    execution_id: str = field(default_factory=lambda: str(uuid4()))
    status: ExecutionStatus = ExecutionStatus.LOADING
    results: dict[str, StepResult] = field(default_factory=dict)
    error: Optional[str] = None
    # HTTP-equivalent status of the failure (404 not found, 422 invalid, 500 fault)
    error_status: Optional[int] = None
    execution_time_ms: int = 0
    steps_completed: int = 0
    total_steps: int = 0
    started_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_finished(self) -> bool:
        return self.status in (ExecutionStatus.COMPLETED, ExecutionStatus.FAILED)

    def add_result(self, step_id: str, result: StepResult) -> None:
        """Store a step result and count the step as attempted."""
        if step_id in self.results:
            raise ValueError(f"Result for step '{step_id}' already recorded")
        if self.steps_completed >= self.total_steps:
            raise ValueError("All steps already accounted for")
        self.results[step_id] = result
        self.steps_completed += 1

    def finish(
        self,
        status: ExecutionStatus,
        error: Optional[str] = None,
        error_status: Optional[int] = None,
    ) -> None:
        self.status = status
        self.error = error
        self.error_status = error_status
        self.completed_at = utc_now()
        self.execution_time_ms = int(
            (self.completed_at - self.started_at).total_seconds() * 1000
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the execution log sink."""
        return {
            "execution_id": self.execution_id,
            "workflow_id": self.workflow_id,
            "user_id": self.user_id,
            "trigger": self.trigger.value,
            "status": self.status.value,
            "results": {sid: r.to_dict() for sid, r in self.results.items()},
            "error": self.error,
            "execution_time": self.execution_time_ms,
            "steps_completed": self.steps_completed,
            "total_steps": self.total_steps,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "metadata": self.metadata,
        }

    def to_response(self) -> dict[str, Any]:
        """Shape returned to the caller of the run-submission API."""
        response: dict[str, Any] = {
            "success": self.status == ExecutionStatus.COMPLETED,
            "workflowId": self.workflow_id,
            "executionId": self.execution_id,
            "status": self.status.value,
            "results": {sid: r.to_dict() for sid, r in self.results.items()},
            "metadata": {
                "executionTimeMs": self.execution_time_ms,
                "stepsCompleted": self.steps_completed,
                "totalSteps": self.total_steps,
            },
        }
        if self.error:
            response["error"] = self.error
        return response
