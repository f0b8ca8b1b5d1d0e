"""HTTP client for the OpenAI-compatible AI completion gateway."""

import logging
from typing import Any

import httpx

from nutrilens_api.core.exceptions import ServiceNotConfiguredError

from .schemas import ToolSchema

logger = logging.getLogger(__name__)


class AIGatewayConnectionError(Exception):
    """The gateway could not be reached or did not answer in time."""


class AIGatewayClient:
    """Client for the chat completions endpoint of the AI gateway."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway client.

        Args:
            base_url: Base URL of the gateway (e.g., "https://ai.gateway.lovable.dev/v1")
            api_key: Bearer token for the gateway
            model: Model identifier sent with every request
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_request_body(
        self,
        messages: list[dict[str, Any]],
        tool_schema: ToolSchema,
    ) -> dict[str, Any]:
        """Chat completion body forcing an answer through ``tool_schema``."""
        return {
            "model": self.model,
            "messages": messages,
            "tools": [tool_schema.as_tool()],
            "tool_choice": tool_schema.tool_choice(),
        }

    async def create_completion(
        self,
        messages: list[dict[str, Any]],
        tool_schema: ToolSchema,
    ) -> httpx.Response:
        """
        Send one chat completion request.

        The response is returned whatever its status; mapping statuses to
        errors is up to the caller.

        Raises:
            ServiceNotConfiguredError: If no API key is configured
            AIGatewayConnectionError: If the request could not be completed
        """
        if not self.api_key:
            logger.error("AI gateway API key is not configured")
            raise ServiceNotConfiguredError()

        client = await self._get_client()
        body = self.build_request_body(messages, tool_schema)

        logger.info(f"Sending completion request to AI gateway ({self.model}, tool={tool_schema.name})")

        try:
            return await client.post(
                "/chat/completions",
                json=body,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as e:
            raise AIGatewayConnectionError(f"AI gateway timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise AIGatewayConnectionError(f"Failed to connect to AI gateway: {e}") from e
