"""Run submission schemas."""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from core.constants import ExecutionStatus, TriggerType


class RunWorkflowRequest(BaseModel):
    """Request to run a workflow."""

    workflow_id: str = Field(min_length=1, alias="workflowId", description="Workflow to run")
    user_id: str = Field(min_length=1, alias="userId", description="Requesting user")
    trigger: TriggerType = Field(default=TriggerType.MANUAL, description="manual, schedule, event or webhook")
    data: Any = Field(default=None, description="Input payload seeded into runtime data")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Caller metadata kept on the record")

    class Config:
        populate_by_name = True


class StepResultResponse(BaseModel):
    success: bool
    result: Any = None
    error: Optional[str] = None
    executionTimeMs: int = 0


class RunMetadata(BaseModel):
    executionTimeMs: int = Field(description="Total run duration in milliseconds")
    stepsCompleted: int = Field(description="Steps attempted")
    totalSteps: int = Field(description="Steps in the workflow")


class RunWorkflowResponse(BaseModel):
    """Execution summary returned to the caller."""

    success: bool
    workflowId: str
    executionId: str
    status: ExecutionStatus
    results: Dict[str, StepResultResponse] = Field(default_factory=dict)
    metadata: RunMetadata
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Transport-level failure (malformed request, unknown workflow)."""

    success: bool = False
    error: str
    timestamp: str
