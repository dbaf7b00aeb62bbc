"""
AI processor client — text completion over HTTP.

Posts ``{prompt, useCase, userId, preferences: {provider}}`` to the configured
AI processor function, authorised with a bearer service key, and returns the
decoded JSON payload.
"""

from typing import Any, Optional

import httpx
import structlog

from core.exceptions import CompletionError
from integrations.interfaces import TextCompletionService

logger = structlog.get_logger(__name__)


class AIProcessorClient(TextCompletionService):
    """TextCompletionService backed by an HTTP AI processor endpoint."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    async def complete(
        self,
        prompt: str,
        use_case: Optional[str],
        user_id: Optional[str],
        provider_hint: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        if not self.is_configured:
            raise CompletionError(503, "AI processor URL not configured")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "prompt": prompt,
            "useCase": use_case,
            "userId": user_id,
            "preferences": {"provider": provider_hint},
        }

        async with httpx.AsyncClient(
            timeout=timeout or self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(self.url, json=payload, headers=headers)

        if not response.is_success:
            logger.warning(
                "AI processor returned error status",
                status_code=response.status_code,
                use_case=use_case,
            )
            raise CompletionError(response.status_code)

        try:
            return response.json()
        except ValueError:
            return response.text
