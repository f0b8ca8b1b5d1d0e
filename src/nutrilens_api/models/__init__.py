"""Pydantic models for API schemas."""

from .analysis import AnalyzeRequest, ErrorResponse

__all__ = [
    "AnalyzeRequest",
    "ErrorResponse",
]
