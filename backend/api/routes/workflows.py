"""Workflow run submission endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.schemas.workflow import ErrorResponse, RunWorkflowRequest, RunWorkflowResponse
from app.dependencies import get_workflow_engine
from core.constants import ExecutionStatus
from core.middleware import error_response
from workflow.engine import WorkflowEngine
from workflow.execution import RunRequest

logger = logging.getLogger(__name__)

router = APIRouter()

# Unversioned path kept for callers of the original edge function
edge_router = APIRouter()

_RUN_RESPONSES = {
    200: {"model": RunWorkflowResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": RunWorkflowResponse},
}


async def execute_workflow(
    request: RunWorkflowRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> Any:
    """
    Run a workflow to completion and return its execution summary.

    Individual step failures are reported inside ``results``; the top-level
    ``error`` is only set for unknown workflows, invalid definitions and
    engine faults.
    """
    record = await engine.run(RunRequest(
        workflow_id=request.workflow_id,
        user_id=request.user_id,
        trigger=request.trigger,
        data=request.data,
        metadata=request.metadata or {},
    ))

    if record.status == ExecutionStatus.FAILED and record.error_status in (404, 422):
        return error_response(record.error_status, record.error)

    status_code = 200 if record.status == ExecutionStatus.COMPLETED else 500
    return JSONResponse(status_code=status_code, content=record.to_response())


router.add_api_route(
    "/execute",
    execute_workflow,
    methods=["POST"],
    responses=_RUN_RESPONSES,
)
edge_router.add_api_route(
    "/workflow-orchestrator",
    execute_workflow,
    methods=["POST"],
    responses=_RUN_RESPONSES,
)


@router.get("/step-types")
async def list_step_types(engine: WorkflowEngine = Depends(get_workflow_engine)) -> list[dict]:
    """List the supported step types with their config schemas."""
    return engine.registry.list_all()
