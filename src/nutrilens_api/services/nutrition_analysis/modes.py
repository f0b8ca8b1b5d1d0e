"""
Analysis request variants and request classification.

An inbound body is classified exactly once into one of four frozen
request types. Each type carries the tool schema its answer must follow,
the message list sent upstream, and the failure message used when the
upstream call fails.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from nutrilens_api.core.exceptions import MissingInputError
from nutrilens_api.models.analysis import AnalyzeRequest

from . import prompts
from .schemas import (
    BUILD_MEAL_SCHEMA,
    COMPARE_SCHEMA,
    IMAGE_ANALYSIS_SCHEMA,
    SEARCH_SCHEMA,
    ToolSchema,
)

logger = logging.getLogger(__name__)

COMPARE_SEPARATOR = " vs "
DEFAULT_IMAGE_MIME = "image/jpeg"


class AnalysisMode(str, Enum):
    """Analysis behaviours selectable through the ``mode`` field."""

    IMAGE = "image"
    SEARCH = "search"
    BUILD = "build"
    COMPARE = "compare"


class ComparisonParseError(ValueError):
    """Comparison query is not of the form '<food A> vs <food B>'."""


def parse_comparison(query: str) -> tuple[str, str]:
    """
    Split a comparison query into its two food names.

    Args:
        query: Text such as "Roti vs Rice"

    Returns:
        Tuple of the two stripped food names

    Raises:
        ComparisonParseError: If the separator is missing or repeated,
            or either side is blank
    """
    parts = query.split(COMPARE_SEPARATOR)
    if len(parts) != 2:
        raise ComparisonParseError(
            f"Expected exactly one {COMPARE_SEPARATOR.strip()!r} separator, "
            f"found {len(parts) - 1}"
        )

    first, second = (part.strip() for part in parts)
    if not first or not second:
        raise ComparisonParseError("Both foods must be named")
    return first, second


def _to_image_url(image_base64: str) -> str:
    """Make sure the image reference is a URL the model accepts."""
    if image_base64.startswith(("data:", "http://", "https://")):
        return image_base64
    return f"data:{DEFAULT_IMAGE_MIME};base64,{image_base64}"


def _messages(user_content: Any) -> list[dict[str, Any]]:
    return [
        {"role": "system", "content": prompts.SYSTEM_PROMPT},
        {"role": "user", "content": user_content},
    ]


@dataclass(frozen=True)
class ImageAnalysisRequest:
    """Analyze a photographed meal."""

    image_url: str

    mode: ClassVar[AnalysisMode] = AnalysisMode.IMAGE
    tool_schema: ClassVar[ToolSchema] = IMAGE_ANALYSIS_SCHEMA
    failure_message: ClassVar[str] = "Failed to analyze image"

    def build_messages(self) -> list[dict[str, Any]]:
        return _messages(
            [
                {"type": "text", "text": prompts.build_image_analysis_prompt()},
                {"type": "image_url", "image_url": {"url": self.image_url}},
            ]
        )


@dataclass(frozen=True)
class SearchRequest:
    """Look up a single food by name."""

    query: str

    mode: ClassVar[AnalysisMode] = AnalysisMode.SEARCH
    tool_schema: ClassVar[ToolSchema] = SEARCH_SCHEMA
    failure_message: ClassVar[str] = "Failed to search food"

    def build_messages(self) -> list[dict[str, Any]]:
        return _messages(prompts.build_search_prompt(self.query))


@dataclass(frozen=True)
class BuildMealRequest:
    """Total up a meal composed of free-text items."""

    meal_items: tuple[str, ...]

    mode: ClassVar[AnalysisMode] = AnalysisMode.BUILD
    tool_schema: ClassVar[ToolSchema] = BUILD_MEAL_SCHEMA
    failure_message: ClassVar[str] = "Failed to calculate meal"

    def build_messages(self) -> list[dict[str, Any]]:
        return _messages(prompts.build_meal_prompt(self.meal_items))


@dataclass(frozen=True)
class CompareRequest:
    """Compare two foods given as 'A vs B'."""

    query: str
    first: str
    second: str

    mode: ClassVar[AnalysisMode] = AnalysisMode.COMPARE
    tool_schema: ClassVar[ToolSchema] = COMPARE_SCHEMA
    failure_message: ClassVar[str] = "Failed to compare foods"

    def build_messages(self) -> list[dict[str, Any]]:
        return _messages(prompts.build_compare_prompt(self.query, self.first, self.second))


AnalysisRequest = Union[ImageAnalysisRequest, SearchRequest, BuildMealRequest, CompareRequest]


def classify_request(body: AnalyzeRequest) -> AnalysisRequest:
    """
    Select the analysis variant for an inbound body.

    A missing or unknown ``mode`` selects image analysis so that clients
    written before the other modes existed keep working.

    Raises:
        MissingInputError: If the field the selected mode needs is empty
    """
    query = (body.query or "").strip()

    match body.mode:
        case AnalysisMode.SEARCH.value:
            if not query:
                raise MissingInputError("Search query is required")
            return SearchRequest(query=query)

        case AnalysisMode.BUILD.value:
            items = tuple(item.strip() for item in body.meal_items or [] if item.strip())
            if not items:
                raise MissingInputError("Meal items are required")
            return BuildMealRequest(meal_items=items)

        case AnalysisMode.COMPARE.value:
            if not query:
                raise MissingInputError("Comparison query is required")
            try:
                first, second = parse_comparison(query)
            except ComparisonParseError as e:
                logger.info(f"Rejected comparison query {query!r}: {e}")
                raise MissingInputError(
                    "Comparison query must be formatted as '<food A> vs <food B>'"
                ) from e
            return CompareRequest(query=query, first=first, second=second)

        case _:
            image = (body.image_base64 or "").strip()
            if not image:
                raise MissingInputError("Image data is required")
            return ImageAnalysisRequest(image_url=_to_image_url(image))
