"""
Base task interface for all step executors.

Every step type (AI processing, data transformation, notification, etc.)
has one BaseTask subclass implementing execute(). The engine only ever calls
run(), which never raises for ordinary failures: whatever goes wrong inside
execute() comes back as a failed StepResult.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import structlog

from core.constants import StepType
from core.exceptions import StepExecutionError
from integrations.interfaces import HttpClient, Notifier, TextCompletionService, WorkflowStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Standardized, immutable result of one step execution."""

    success: bool
    result: Any = None
    error: Optional[str] = None
    execution_time_ms: int = 0

    @classmethod
    def ok(cls, result: Any = None) -> "StepResult":
        return cls(success=True, result=result)

    @classmethod
    def failure(cls, error: str) -> "StepResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.success:
            data["result"] = self.result
        else:
            data["error"] = self.error
        data["executionTimeMs"] = self.execution_time_ms
        return data


@dataclass
class Collaborators:
    """External capabilities handed to step executors."""

    store: Optional[WorkflowStore] = None
    completion: Optional[TextCompletionService] = None
    notifier: Optional[Notifier] = None
    http: Optional[HttpClient] = None


class BaseTask(ABC):
    """
    Abstract base class for all step executors.

    Subclasses must implement:
    - execute(step, data) -> StepResult
    - step_type (class attribute)
    - display_name (class attribute)
    """

    step_type: StepType
    display_name: str = "Base Task"
    description: str = "Abstract base task"
    config_model: Optional[type] = None

    def __init__(
        self,
        collaborators: Optional[Collaborators] = None,
        enforce_timeouts: bool = True,
        default_timeout: Optional[float] = None,
    ):
        self.collaborators = collaborators or Collaborators()
        self.enforce_timeouts = enforce_timeouts
        self.default_timeout = default_timeout

    @abstractmethod
    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        """
        Execute the step against the runtime data.

        Args:
            step: Parsed step definition (its config is already schema-checked)
            data: Runtime data of the current run. Read only by convention.

        Returns:
            StepResult with result or error
        """
        pass

    def effective_timeout(self, step: Any) -> Optional[float]:
        """Deadline for this step in seconds, or None when unbounded."""
        if not self.enforce_timeouts:
            return None
        return step.timeout or self.default_timeout

    async def run(self, step: Any, data: Dict[str, Any]) -> StepResult:
        """
        Run the step with timing, timeout and error capture.

        This is the main entry point called by the workflow engine.
        """
        start = time.monotonic()
        timeout = self.effective_timeout(step)
        logger.info(
            "Step starting",
            step_id=step.id,
            step_type=self.step_type.value,
            timeout=timeout,
        )
        try:
            if timeout:
                result = await asyncio.wait_for(self._execute_guarded(step, data), timeout=timeout)
            else:
                result = await self._execute_guarded(step, data)
        except asyncio.TimeoutError:
            result = StepResult.failure(f"Step timed out after {timeout:g}s")
        except Exception as e:
            logger.error(
                "Step raised",
                step_id=step.id,
                step_type=self.step_type.value,
                error=str(e),
            )
            result = StepResult.failure(str(e) or e.__class__.__name__)

        duration_ms = int((time.monotonic() - start) * 1000)
        result = replace(result, execution_time_ms=duration_ms)

        log = logger.info if result.success else logger.warning
        log(
            "Step finished",
            step_id=step.id,
            step_type=self.step_type.value,
            success=result.success,
            error=result.error,
            duration_ms=duration_ms,
        )
        return result

    async def _execute_guarded(self, step: Any, data: Dict[str, Any]) -> StepResult:
        # TimeoutError from inside execute() (socket, driver) is an ordinary
        # failure; only the step deadline in run() may surface as one.
        try:
            return await self.execute(step, data)
        except asyncio.TimeoutError as e:
            raise StepExecutionError(str(e) or e.__class__.__name__) from e

    @classmethod
    def get_config_schema(cls) -> Dict[str, Any]:
        """Return JSON schema for this step type's config."""
        if cls.config_model is None:
            return {"type": "object", "properties": {}}
        return cls.config_model.model_json_schema(by_alias=True)
