"""httpx implementation of the HttpClient collaborator."""

from typing import Optional

import httpx

from integrations.interfaces import HttpClient, HttpResponse


class HttpxClient(HttpClient):
    """Issue requests with a short-lived httpx.AsyncClient per call."""

    def __init__(
        self,
        default_timeout: float = 30.0,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.default_timeout = default_timeout
        self.follow_redirects = follow_redirects
        self._transport = transport

    async def call(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        async with httpx.AsyncClient(
            timeout=timeout or self.default_timeout,
            follow_redirects=self.follow_redirects,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method.upper(),
                url,
                headers=headers or {},
                content=body.encode() if body is not None else None,
            )

        # Parse response
        try:
            data = response.json()
        except ValueError:
            data = response.text

        return HttpResponse(
            status=response.status_code,
            body=data,
            headers=dict(response.headers),
        )
