"""
Nutrition analysis gateway.

Forwards image, search, build-meal and compare requests to an external AI
completion gateway and validates the structured answers.
"""

from .client import AIGatewayClient, AIGatewayConnectionError
from .factory import get_analysis_gateway, shutdown_analysis_gateway
from .gateway import AnalysisGateway, extract_tool_arguments
from .modes import (
    AnalysisMode,
    AnalysisRequest,
    BuildMealRequest,
    CompareRequest,
    ComparisonParseError,
    ImageAnalysisRequest,
    SearchRequest,
    classify_request,
    parse_comparison,
)
from .schemas import (
    BUILD_MEAL_SCHEMA,
    COMPARE_SCHEMA,
    IMAGE_ANALYSIS_SCHEMA,
    SEARCH_SCHEMA,
    ToolSchema,
)

__all__ = [
    "AIGatewayClient",
    "AIGatewayConnectionError",
    "AnalysisGateway",
    "AnalysisMode",
    "AnalysisRequest",
    "BuildMealRequest",
    "CompareRequest",
    "ComparisonParseError",
    "ImageAnalysisRequest",
    "SearchRequest",
    "ToolSchema",
    "BUILD_MEAL_SCHEMA",
    "COMPARE_SCHEMA",
    "IMAGE_ANALYSIS_SCHEMA",
    "SEARCH_SCHEMA",
    "classify_request",
    "extract_tool_arguments",
    "get_analysis_gateway",
    "parse_comparison",
    "shutdown_analysis_gateway",
]
