"""Health check endpoint."""

from fastapi import APIRouter

from recipe_bookmarks.config import get_settings
from recipe_bookmarks.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Reports which optional extraction strategies are configured. A missing
    credential only disables its strategy, so the API stays healthy.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        youtube_api=settings.youtube_api_enabled,
        llm=settings.llm_enabled,
    )
