"""
Task Registry — maps every StepType to its executor.

The set of step types is closed, so the registry is built once from the
built-in executors and holds one instance per type, all sharing the same
collaborators.
"""

from typing import Dict, Optional, Type

from core.constants import StepType
from tasks.base_task import BaseTask, Collaborators
from tasks.implementations.ai_task import AI_TASK_TYPES
from tasks.implementations.condition_task import CONDITION_TASK_TYPES
from tasks.implementations.http_task import HTTP_TASK_TYPES
from tasks.implementations.notification_task import NOTIFICATION_TASK_TYPES
from tasks.implementations.transform_task import TRANSFORM_TASK_TYPES


BUILTIN_TASK_TYPES: Dict[StepType, Type[BaseTask]] = {
    **AI_TASK_TYPES,
    **TRANSFORM_TASK_TYPES,
    **NOTIFICATION_TASK_TYPES,
    **HTTP_TASK_TYPES,
    **CONDITION_TASK_TYPES,
}


class TaskRegistry:
    """Central registry for step executors."""

    def __init__(
        self,
        collaborators: Optional[Collaborators] = None,
        enforce_timeouts: bool = True,
        default_timeout: Optional[float] = None,
    ):
        self.collaborators = collaborators or Collaborators()
        self._enforce_timeouts = enforce_timeouts
        self._default_timeout = default_timeout
        self._tasks: Dict[StepType, BaseTask] = {}
        for step_type, task_class in BUILTIN_TASK_TYPES.items():
            self.register(step_type, task_class)

    def register(self, step_type: StepType, task_class: Type[BaseTask]) -> None:
        """Register (or replace) the executor for a step type."""
        self._tasks[StepType(step_type)] = task_class(
            collaborators=self.collaborators,
            enforce_timeouts=self._enforce_timeouts,
            default_timeout=self._default_timeout,
        )

    def get(self, step_type) -> Optional[BaseTask]:
        """Get the executor instance for a step type string or enum."""
        try:
            return self._tasks.get(StepType(step_type))
        except ValueError:
            return None

    def list_all(self) -> list:
        """List all registered step types with metadata."""
        return [
            {
                "step_type": step_type.value,
                "display_name": task.display_name,
                "description": task.description,
                "config_schema": task.get_config_schema(),
            }
            for step_type, task in self._tasks.items()
        ]

    @property
    def available_types(self) -> list:
        return [step_type.value for step_type in self._tasks]
