"""Recipe link preview endpoints."""

from fastapi import APIRouter, Depends

from recipe_bookmarks.models.schemas import OGPPreviewRequest, OGPPreviewResponse
from recipe_bookmarks.services.ogp import OGPService, get_ogp_service

router = APIRouter(prefix="/ogp", tags=["ogp"])

PREVIEW_FAILED_MESSAGE = "Could not fetch page information"


@router.post(
    "/preview",
    response_model=OGPPreviewResponse,
    response_model_exclude_none=True,
)
async def preview_ogp(
    request: OGPPreviewRequest,
    service: OGPService = Depends(get_ogp_service),
):
    """
    Preview a recipe URL before saving it.

    Returns title, description, image and any ingredients/instructions that
    could be extracted. Upstream failures only drop fields; an error is
    returned when the URL is invalid or nothing could be fetched.
    """
    ogp_data = await service.fetch_ogp(request.url)
    if not ogp_data:
        return OGPPreviewResponse(success=False, error=PREVIEW_FAILED_MESSAGE)

    return OGPPreviewResponse(success=True, data=ogp_data)
