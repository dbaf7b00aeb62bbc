"""Execution Recorder — best-effort persistence of run records.

Sink failures are logged and swallowed: recording never changes a run's
status and never reaches the caller.
"""

from typing import Optional

import structlog

from integrations.interfaces import ExecutionLogSink
from tasks.base_task import StepResult
from workflow.execution import ExecutionRecord

logger = structlog.get_logger(__name__)


class ExecutionRecorder:
    """Writes ExecutionRecords (and optionally step results) to a log sink."""

    def __init__(self, sink: Optional[ExecutionLogSink] = None, record_steps: bool = False):
        self._sink = sink
        self._record_steps = record_steps

    @property
    def records_steps(self) -> bool:
        return self._sink is not None and self._record_steps

    async def record(self, record: ExecutionRecord) -> None:
        if self._sink is None:
            return
        try:
            await self._sink.append(record.to_dict())
        except Exception as e:
            logger.error(
                "Failed to record workflow execution",
                execution_id=record.execution_id,
                workflow_id=record.workflow_id,
                error=str(e),
            )

    async def record_step(self, record: ExecutionRecord, step_id: str, result: StepResult) -> None:
        if not self.records_steps:
            return
        entry = {
            "execution_id": record.execution_id,
            "workflow_id": record.workflow_id,
            "step_id": step_id,
            **result.to_dict(),
        }
        try:
            await self._sink.append_step(entry)
        except Exception as e:
            logger.error(
                "Failed to record step result",
                execution_id=record.execution_id,
                step_id=step_id,
                error=str(e),
            )
