from .recipe import RecipeSections
from .schemas import OGPData, OGPPreviewRequest, OGPPreviewResponse, HealthResponse

__all__ = [
    "RecipeSections",
    "OGPData",
    "OGPPreviewRequest",
    "OGPPreviewResponse",
    "HealthResponse",
]
