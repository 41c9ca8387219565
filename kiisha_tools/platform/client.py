"""Platform API client.

Tool handlers never touch the database; they call the platform's own API,
which runs its usual authorization for the forwarded user. The tool layer is
an extra check in front of it, not a replacement.
"""

from typing import Any

import httpx

from kiisha_tools.base import ExecutionContext

from .exceptions import (
    PlatformAPIError,
    PlatformAuthError,
    PlatformForbiddenError,
    PlatformNotFoundError,
    PlatformValidationError,
)


class PlatformClient:
    """Async client for the platform business API.

    Provides:
    - Caller identity forwarding (user, org, role, channel, correlation id)
    - Error handling and exception mapping
    """

    def __init__(
        self,
        base_url: str,
        service_token: str = "",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize platform client.

        Args:
            base_url: Platform API base URL
            service_token: Token identifying the assistant service
            timeout_seconds: Request timeout
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.service_token = service_token
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def _get_headers(self, ctx: ExecutionContext) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "X-User-Id": str(ctx.user_id),
            "X-Org-Id": str(ctx.org_id),
            "X-User-Role": ctx.role,
            "X-Channel": ctx.channel.value,
            "X-Correlation-Id": ctx.correlation_id,
        }
        if self.service_token:
            headers["Authorization"] = f"Bearer {self.service_token}"
        return headers

    def _handle_error(self, response: httpx.Response) -> None:
        """Map platform API errors to custom exceptions."""
        status = response.status_code

        try:
            error_data = response.json()
            message = error_data.get("message") or error_data.get("detail") or response.text
        except Exception:
            message = response.text

        if status == 401:
            raise PlatformAuthError(f"Authentication failed: {message}")
        elif status == 403:
            raise PlatformForbiddenError(f"Forbidden: {message}")
        elif status == 404:
            raise PlatformNotFoundError(f"Not found: {message}")
        elif status in (400, 422):
            raise PlatformValidationError(f"Invalid request: {message}")
        else:
            raise PlatformAPIError(f"Platform API error ({status}): {message}")

    async def request(
        self,
        method: str,
        path: str,
        ctx: ExecutionContext,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request on behalf of the caller in ctx.

        None-valued query parameters are dropped.

        Raises:
            PlatformAPIError: Any non-2xx response or transport failure
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    headers=self._get_headers(ctx),
                    params=params or None,
                    json=json,
                )
        except httpx.HTTPError as e:
            raise PlatformAPIError(f"Request failed: {e}")

        if response.status_code >= 400:
            self._handle_error(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get(self, path: str, ctx: ExecutionContext, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, ctx, params=params)

    async def post(self, path: str, ctx: ExecutionContext, json: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, ctx, json=json)

    async def patch(self, path: str, ctx: ExecutionContext, json: dict[str, Any] | None = None) -> Any:
        return await self.request("PATCH", path, ctx, json=json)
