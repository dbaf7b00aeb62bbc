"""Workflow Execution Engine — sequential step runner.

Takes a run request, loads the workflow definition from the store and runs
its steps one after another against a mutable runtime-data mapping:

    Loading ──(not found / invalid)──────────────▶ Failed
       │
       ▼
    Running ──(every step attempted)─────────────▶ Completed
       │
       └──(exception escapes a step invocation)──▶ Failed

A step that reports ``success=False`` does not stop the run and does not fail
it; its error is only visible in ``results[step_id]``. The run is recorded
once, after it reaches a final state.
"""

from typing import Any, Optional

import structlog

from core.constants import DATA_FIELD, USER_ID_FIELD, ExecutionStatus, StepType
from core.exceptions import EngineFault, NotFoundError, WorkflowDefinitionError
from core.logging_config import run_log_context
from integrations.interfaces import WorkflowStore
from tasks.base_task import StepResult
from tasks.registry import TaskRegistry
from workflow.execution import ExecutionRecord, RunRequest
from workflow.graph import execution_order, validate_dependencies
from workflow.models import WorkflowDefinition
from workflow.recorder import ExecutionRecorder

logger = structlog.get_logger(__name__)


def build_runtime_data(request: RunRequest) -> dict[str, Any]:
    """Seed runtime data from the input payload plus the reserved userId."""
    payload = request.data
    if isinstance(payload, dict):
        data = dict(payload)
    elif payload is None:
        data = {}
    else:
        data = {DATA_FIELD: payload}
    data[USER_ID_FIELD] = request.user_id
    return data


class WorkflowEngine:
    """Main workflow execution engine.

    Collaborators are injected; the engine keeps no per-run state on the
    instance, so one engine can serve concurrent runs.
    """

    def __init__(
        self,
        store: WorkflowStore,
        registry: TaskRegistry,
        recorder: Optional[ExecutionRecorder] = None,
        dependency_ordering: bool = False,
    ):
        self._store = store
        self._registry = registry
        self._recorder = recorder or ExecutionRecorder()
        self._dependency_ordering = dependency_ordering

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    async def run(self, request: RunRequest) -> ExecutionRecord:
        """Execute one run and return its finalized record.

        Raises:
            ValidationError: the request is malformed; nothing is executed or recorded
        """
        request.validate()

        record = ExecutionRecord(
            workflow_id=request.workflow_id,
            user_id=request.user_id,
            trigger=request.trigger,
            metadata=dict(request.metadata),
        )
        with run_log_context(record.execution_id, record.workflow_id):
            return await self._execute(request, record)

    async def _execute(self, request: RunRequest, record: ExecutionRecord) -> ExecutionRecord:
        logger.info("Workflow run starting", trigger=record.trigger.value)

        try:
            definition = await self._load(request.workflow_id)
        except (NotFoundError, WorkflowDefinitionError) as e:
            logger.warning("Workflow could not be loaded", error=e.message)
            return await self._finish(record, ExecutionStatus.FAILED, e.message, e.status_code)
        except Exception as e:
            logger.error("Workflow store lookup failed", error=str(e), exc_info=True)
            return await self._finish(record, ExecutionStatus.FAILED, f"Workflow lookup failed: {e}", 500)

        steps = execution_order(definition.steps, self._dependency_ordering)
        record.total_steps = len(steps)
        record.status = ExecutionStatus.RUNNING
        data = build_runtime_data(request)

        try:
            for step in steps:
                result = await self._invoke(step, data, record)
                record.add_result(step.id, result)
                self._apply_output(step, result, data)
                await self._recorder.record_step(record, step.id, result)
        except EngineFault as e:
            logger.error(
                "Workflow run aborted",
                error=e.message,
                steps_completed=record.steps_completed,
                total_steps=record.total_steps,
            )
            return await self._finish(record, ExecutionStatus.FAILED, e.message, e.status_code)

        failed = [sid for sid, r in record.results.items() if not r.success]
        if failed:
            logger.warning("Workflow completed with failed steps", failed_steps=failed)
        return await self._finish(record, ExecutionStatus.COMPLETED)

    async def _load(self, workflow_id: str) -> WorkflowDefinition:
        definition = await self._store.get_workflow(workflow_id)
        if definition is None:
            raise NotFoundError("Workflow not found")
        validate_dependencies(definition.steps)
        return definition

    async def _invoke(self, step: Any, data: dict[str, Any], record: ExecutionRecord) -> StepResult:
        """Run one step through its executor, turning contract violations into EngineFault."""
        handler = self._registry.get(step.type)
        if handler is None:
            raise EngineFault(f"No executor registered for step type: {step.type}")

        pending = [dep for dep in step.dependencies if dep not in record.results]
        if pending:
            logger.warning(
                "Step dependencies have not produced results yet",
                step_id=step.id,
                pending=pending,
            )

        try:
            result = await handler.run(step, data)
        except Exception as e:
            raise EngineFault(f"Step '{step.id}' raised unexpectedly: {e}") from e

        if not isinstance(result, StepResult):
            raise EngineFault(
                f"Step '{step.id}' returned {type(result).__name__} instead of a StepResult"
            )
        return result

    @staticmethod
    def _apply_output(step: Any, result: StepResult, data: dict[str, Any]) -> None:
        """Write transformation output back into runtime data when requested."""
        if step.type != StepType.DATA_TRANSFORMATION.value or not result.success:
            return
        if step.config.replace_data:
            data[step.config.source or DATA_FIELD] = result.result

    async def _finish(
        self,
        record: ExecutionRecord,
        status: ExecutionStatus,
        error: Optional[str] = None,
        error_status: Optional[int] = None,
    ) -> ExecutionRecord:
        record.finish(status, error, error_status)
        logger.info(
            "Workflow run finished",
            status=status.value,
            steps_completed=record.steps_completed,
            total_steps=record.total_steps,
            duration_ms=record.execution_time_ms,
        )
        await self._recorder.record(record)
        return record
