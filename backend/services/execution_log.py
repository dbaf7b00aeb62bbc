"""Execution log sinks — SQL-backed and in-memory."""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import RecorderError
from db.models.workflow_execution import WorkflowExecution, WorkflowStepExecution
from integrations.interfaces import ExecutionLogSink


class SqlExecutionLogSink(ExecutionLogSink):
    """Inserts execution records into ``workflow_executions``.

    Database errors surface as RecorderError.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def append(self, record: dict[str, Any]) -> None:
        try:
            async with self._session_factory() as session:
                session.add(WorkflowExecution(
                    execution_id=record["execution_id"],
                    workflow_id=record["workflow_id"],
                    user_id=record["user_id"],
                    trigger=record["trigger"],
                    status=record["status"],
                    results=record.get("results"),
                    error=record.get("error"),
                    execution_time=record.get("execution_time", 0),
                    steps_completed=record.get("steps_completed", 0),
                    total_steps=record.get("total_steps", 0),
                    metadata_=record.get("metadata"),
                ))
                await session.commit()
        except SQLAlchemyError as e:
            raise RecorderError(f"Failed to record execution {record['execution_id']}: {e}") from e

    async def append_step(self, entry: dict[str, Any]) -> None:
        try:
            async with self._session_factory() as session:
                session.add(WorkflowStepExecution(
                    execution_id=entry["execution_id"],
                    workflow_id=entry["workflow_id"],
                    step_id=entry["step_id"],
                    success=entry["success"],
                    result=entry.get("result"),
                    error=entry.get("error"),
                    execution_time=entry.get("executionTimeMs", 0),
                ))
                await session.commit()
        except SQLAlchemyError as e:
            raise RecorderError(f"Failed to record step {entry['step_id']}: {e}") from e


class InMemoryExecutionLogSink(ExecutionLogSink):
    """Keeps appended records in lists."""

    def __init__(self):
        self.records: list[dict[str, Any]] = []
        self.steps: list[dict[str, Any]] = []

    async def append(self, record: dict[str, Any]) -> None:
        self.records.append(record)

    async def append_step(self, entry: dict[str, Any]) -> None:
        self.steps.append(entry)
