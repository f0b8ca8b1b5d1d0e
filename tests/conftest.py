"""Pytest configuration and fixtures."""

import json
from typing import Any, AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from nutrilens_api.main import app
from nutrilens_api.services.nutrition_analysis import (
    AIGatewayClient,
    AnalysisGateway,
    get_analysis_gateway,
)

# Sample test image (1x1 red pixel PNG)
TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)
TINY_PNG_DATA_URI = f"data:image/png;base64,{TINY_PNG_BASE64}"


def completion_with_tool_call(name: str, arguments: Any) -> dict:
    """Chat completion body containing a single tool call."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "finish_reason": "tool_calls",
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": name, "arguments": arguments},
                        }
                    ],
                },
            }
        ],
    }


class StubUpstream:
    """
    Deterministic stand-in for the AI gateway.

    Every request is recorded; the response comes from ``responder``,
    which defaults to a fixed status and JSON body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {}
        self.responder: Callable[[httpx.Request], httpx.Response] | None = None

    def reply(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {}

    def reply_with_tool(self, name: str, arguments: Any) -> None:
        self.reply(200, completion_with_tool_call(name, arguments))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
async def gateway_client(upstream: StubUpstream) -> AsyncGenerator[AIGatewayClient, None]:
    client = AIGatewayClient(
        base_url="https://gateway.test/v1",
        api_key="test-key",
        model="google/gemini-2.5-flash",
        timeout=5.0,
        transport=httpx.MockTransport(upstream.handle),
    )
    yield client
    await client.close()


@pytest.fixture
async def gateway(gateway_client: AIGatewayClient) -> AsyncGenerator[AnalysisGateway, None]:
    gateway = AnalysisGateway(gateway_client)
    yield gateway
    await gateway.close()


@pytest.fixture
async def client(gateway: AnalysisGateway) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client wired to the stub upstream.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_analysis_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def image_result() -> dict:
    return {
        "calories": 520,
        "protein": 18,
        "carbs": 72,
        "fat": 17,
        "fiber": 9,
        "servingSize": "1 plate (2 rotis + 1 katori dal + 1 katori sabzi)",
        "foodType": "Roti with Dal and Aloo Gobi",
        "detectedItems": [
            {"name": "Roti", "portion": "2 rotis", "calories": 200},
            {"name": "Dal Tadka", "portion": "1 katori", "calories": 180},
            {"name": "Aloo Gobi", "portion": "1 katori", "calories": 140},
        ],
        "nutritionScore": "B",
        "warnings": [{"type": "high-ghee", "message": "Tadka uses about 1 tbsp ghee"}],
        "tips": ["Good protein from dal", "Add a katori of curd", "Use less ghee in the tadka"],
    }


@pytest.fixture
def search_result() -> dict:
    return {
        "name": "Idli",
        "description": "Steamed fermented rice and urad dal cakes from South India.",
        "calories": 78,
        "protein": 2.5,
        "carbs": 16,
        "fat": 0.4,
        "defaultPortion": "2 pieces (80g)",
        "portionOptions": [{"label": "4 pieces", "multiplier": 2}],
        "region": "South India",
        "nutritionScore": "A",
        "relatedFoods": ["Dosa", "Uttapam"],
    }


@pytest.fixture
def build_result() -> dict:
    return {
        "items": [
            {"name": "Roti", "portion": "2 Rotis", "calories": 200, "protein": 6, "carbs": 36, "fat": 4},
            {"name": "Dal", "portion": "1 Katori", "calories": 150, "protein": 9, "carbs": 20, "fat": 4},
        ],
        "totalCalories": 350,
        "totalProtein": 15,
        "totalCarbs": 56,
        "totalFat": 8,
        "nutritionScore": "A-",
        "mealReview": "A balanced vegetarian meal with good fiber; add a vegetable for micronutrients.",
    }


@pytest.fixture
def compare_result() -> dict:
    return {
        "food1": {
            "name": "Roti",
            "portion": "1 roti (40g)",
            "calories": 100,
            "protein": 3,
            "carbs": 18,
            "fat": 2,
            "nutritionScore": "A",
            "pros": ["Whole grain fiber"],
        },
        "food2": {
            "name": "Rice",
            "portion": "1 katori (150g)",
            "calories": 195,
            "protein": 4,
            "carbs": 42,
            "fat": 0.5,
            "nutritionScore": "B",
            "cons": ["Higher glycemic index"],
        },
        "winner": "Roti",
        "verdict": "Roti has more fiber and fewer calories per serving.",
    }
