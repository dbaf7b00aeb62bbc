"""AI processing step.

Resolves the prompt template against runtime data and hands it to the
text-completion service together with the use case, the requesting user and
the provider preference.
"""

from typing import Any, Dict

import httpx

from core.constants import USER_ID_FIELD, StepType
from core.exceptions import CompletionError
from tasks.base_task import BaseTask, StepResult
from workflow.models import AIProcessingConfig
from workflow.templating import resolve_template


class AIProcessingTask(BaseTask):
    """Send a resolved prompt to the text-completion service."""

    step_type = StepType.AI_PROCESSING
    display_name = "AI Processing"
    description = "Run a prompt template through the AI text-completion service"
    config_model = AIProcessingConfig

    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        service = self.collaborators.completion
        if service is None:
            return StepResult.failure("AI processing failed: completion service not configured")

        config: AIProcessingConfig = step.config
        prompt = resolve_template(config.prompt, data)

        try:
            response = await service.complete(
                prompt,
                config.use_case,
                data.get(USER_ID_FIELD),
                config.provider,
                timeout=self.effective_timeout(step),
            )
        except CompletionError as e:
            return StepResult.failure(f"AI processing failed: {e.status}")
        except httpx.HTTPError as e:
            return StepResult.failure(f"AI processing failed: {e}")

        return StepResult.ok(response)


AI_TASK_TYPES = {
    StepType.AI_PROCESSING: AIProcessingTask,
}
