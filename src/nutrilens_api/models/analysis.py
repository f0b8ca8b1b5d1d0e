"""Request and response models for the nutrition analysis endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """
    Inbound body of POST /analyze-nutrition.

    Field names follow the frontend's camelCase wire format. Which fields
    are required depends on ``mode``; that check happens during request
    classification, not here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mode: str | None = Field(
        default=None,
        description='"search", "build" or "compare"; anything else means image analysis',
    )
    image_base64: str | None = Field(
        default=None,
        alias="imageBase64",
        description="Data-URI encoded meal photo (image analysis mode)",
    )
    query: str | None = Field(
        default=None,
        description='Food name (search) or "<food A> vs <food B>" (compare)',
    )
    meal_items: list[str] | None = Field(
        default=None,
        alias="mealItems",
        description='Free-text meal components such as "2 Rotis" (build mode)',
    )


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx response."""

    error: str = Field(description="Human-readable error message")
