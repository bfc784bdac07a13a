"""Pydantic schemas for API request/response validation.

OGPData mirrors the link-preview shape the bookmarking front end consumes:
every optional field is omitted from the JSON when unavailable.
"""

from pydantic import BaseModel
from typing import Optional


# ============================================================
# Extraction result
# ============================================================

class OGPData(BaseModel):
    """Best-effort metadata for a recipe URL."""
    title: str
    url: str
    description: Optional[str] = None
    image: Optional[str] = None
    ingredients: Optional[str] = None  # newline-joined, source order
    instructions: Optional[str] = None  # newline-joined, source order


# ============================================================
# Request/Response Schemas
# ============================================================

class OGPPreviewRequest(BaseModel):
    """Request to preview a recipe URL."""
    url: str


class OGPPreviewResponse(BaseModel):
    """Preview result, or an error message when nothing could be fetched."""
    success: bool
    data: Optional[OGPData] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    youtube_api: bool
    llm: bool


__all__ = [
    "OGPData",
    "OGPPreviewRequest",
    "OGPPreviewResponse",
    "HealthResponse",
]
