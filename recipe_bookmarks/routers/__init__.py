from .health import router as health_router
from .ogp import router as ogp_router

__all__ = ["health_router", "ogp_router"]
