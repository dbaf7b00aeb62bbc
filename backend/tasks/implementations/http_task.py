"""API call step implementation.

Issues one HTTP request built from the step config. Header values and the
body template are resolved against runtime data; the body is sent for every
method except GET. Only a 2xx status counts as success.
"""

from typing import Any, Dict

from core.constants import StepType
from tasks.base_task import BaseTask, StepResult
from workflow.models import ApiCallConfig
from workflow.templating import resolve_template, resolve_value


class ApiCallTask(BaseTask):
    """Call an external HTTP API.

    Config:
        url: Target URL (required)
        method: HTTP method (default: GET)
        headers: Dict of HTTP headers (values may hold {field} placeholders)
        bodyTemplate: Request body with {field} placeholders
    """

    step_type = StepType.API_CALL
    display_name = "API Call"
    description = "Make an HTTP request to an external API"
    config_model = ApiCallConfig

    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        client = self.collaborators.http
        if client is None:
            return StepResult.failure("API call failed: HTTP client not configured")

        config: ApiCallConfig = step.config
        method = (config.method or "GET").upper()

        body = None
        if method != "GET" and config.body_template is not None:
            body = resolve_template(config.body_template, data)

        response = await client.call(
            method,
            config.url,
            headers=resolve_value(dict(config.headers), data),
            body=body,
            timeout=self.effective_timeout(step),
        )

        if not response.ok:
            return StepResult.failure(f"API call failed: {response.status}")

        return StepResult.ok(response.body)


HTTP_TASK_TYPES = {
    StepType.API_CALL: ApiCallTask,
}
