"""
Analysis gateway.

Classifies a request, makes exactly one upstream completion call with the
mode's tool schema, and returns the tool arguments or a typed error.
Nothing is retried, cached, or post-processed here.
"""

import json
import logging
from typing import Any

import httpx

from nutrilens_api.core.exceptions import (
    MalformedUpstreamResponseError,
    UpstreamBillingExhaustedError,
    UpstreamFailureError,
    UpstreamRateLimitedError,
)
from nutrilens_api.models.analysis import AnalyzeRequest

from .client import AIGatewayClient, AIGatewayConnectionError
from .modes import AnalysisRequest, classify_request
from .schemas import ToolSchema

logger = logging.getLogger(__name__)

# Upstream error bodies can be large; only this much is logged
LOG_BODY_LIMIT = 500


def extract_tool_arguments(data: Any, tool_schema: ToolSchema) -> dict[str, Any]:
    """
    Pull the arguments of the designated tool call out of a completion.

    Args:
        data: Decoded JSON body of a successful chat completion
        tool_schema: Schema the arguments must satisfy

    Returns:
        The parsed arguments, unmodified

    Raises:
        MalformedUpstreamResponseError: If there is no call to the tool,
            its arguments are not a JSON object, or they do not match the schema
    """
    try:
        tool_calls = data["choices"][0]["message"].get("tool_calls") or []
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise MalformedUpstreamResponseError(details={"reason": "no message in completion"}) from e

    function = None
    for call in tool_calls:
        candidate = call.get("function") if isinstance(call, dict) else None
        if isinstance(candidate, dict) and candidate.get("name") == tool_schema.name:
            function = candidate
            break

    if function is None or not function.get("arguments"):
        raise MalformedUpstreamResponseError(
            details={"reason": f"no {tool_schema.name} tool call in completion"}
        )

    arguments = function["arguments"]
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise MalformedUpstreamResponseError(
                details={"reason": f"tool arguments are not valid JSON: {e}"}
            ) from e

    if not isinstance(arguments, dict):
        raise MalformedUpstreamResponseError(
            details={"reason": "tool arguments are not a JSON object"}
        )

    problems = tool_schema.find_problems(arguments)
    if problems:
        raise MalformedUpstreamResponseError(
            details={"reason": "arguments do not match the tool schema", "problems": problems}
        )

    return arguments


class AnalysisGateway:
    """Routes nutrition analysis requests to the AI gateway."""

    def __init__(self, client: AIGatewayClient) -> None:
        self.client = client

    async def close(self) -> None:
        await self.client.close()

    async def handle(self, body: AnalyzeRequest) -> dict[str, Any]:
        """
        Handle one inbound analysis request.

        Returns:
            Structured result matching the selected mode's tool schema

        Raises:
            GatewayError: For every failure, already classified
        """
        request = classify_request(body)
        logger.info(f"Analysis mode selected: {request.mode.value}")
        return await self.analyze(request)

    async def analyze(self, request: AnalysisRequest) -> dict[str, Any]:
        """Run an already classified request against the upstream model."""
        try:
            response = await self.client.create_completion(
                request.build_messages(),
                request.tool_schema,
            )
        except AIGatewayConnectionError as e:
            logger.error(f"AI gateway unreachable ({request.mode.value}): {e}")
            raise UpstreamFailureError(request.failure_message, details={"reason": str(e)}) from e

        result = self._handle_response(response, request)
        logger.info(f"Analysis complete ({request.mode.value}, tool={request.tool_schema.name})")
        return result

    def _handle_response(self, response: httpx.Response, request: AnalysisRequest) -> dict[str, Any]:
        """Map an upstream response to a result or a gateway error."""
        if not response.is_success:
            logger.error(
                f"AI gateway error ({request.mode.value}): {response.status_code} "
                f"{response.text[:LOG_BODY_LIMIT]}"
            )
            if response.status_code == 429:
                raise UpstreamRateLimitedError()
            if response.status_code == 402:
                raise UpstreamBillingExhaustedError()
            raise UpstreamFailureError(
                request.failure_message,
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"AI gateway returned a non-JSON body ({request.mode.value})")
            raise MalformedUpstreamResponseError(details={"reason": "body is not JSON"}) from e

        try:
            return extract_tool_arguments(data, request.tool_schema)
        except MalformedUpstreamResponseError as e:
            logger.error(
                f"No usable {request.tool_schema.name} payload in response: {e.details} "
                f"{json.dumps(data)[:LOG_BODY_LIMIT]}"
            )
            raise
