"""Nutrition analysis API routes."""

import json
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from nutrilens_api.api.dependencies import AnalysisGatewayDep
from nutrilens_api.core.exceptions import InternalError
from nutrilens_api.models.analysis import AnalyzeRequest, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 402, 429, 500)
}


async def _read_body(request: Request) -> AnalyzeRequest:
    """Parse the JSON body; anything unreadable is an internal error."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InternalError(f"Invalid JSON body: {e}") from e

    try:
        return AnalyzeRequest.model_validate(payload)
    except ValidationError as e:
        raise InternalError(
            f"Invalid request body: {e.error_count()} validation error(s)",
            details=e.errors(include_url=False),
        ) from e


@router.options("/analyze-nutrition", include_in_schema=False)
async def analyze_nutrition_preflight() -> Response:
    """Answer CORS preflight with an empty body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/analyze-nutrition", responses=ERROR_RESPONSES)
async def analyze_nutrition(request: Request, gateway: AnalysisGatewayDep) -> JSONResponse:
    """
    Analyze a meal photo, look up a food, total a meal, or compare two foods.

    Body: ``{"mode"?: "search" | "build" | "compare", "imageBase64"?: str,
    "query"?: str, "mealItems"?: [str]}``. Without ``mode`` the request is
    treated as image analysis.

    Returns the structured result of the selected mode unchanged.
    """
    body = await _read_body(request)
    result = await gateway.handle(body)
    return JSONResponse(content=result, headers=CORS_HEADERS)
