"""Services module for recipe link extraction."""

from .video import VideoService, extract_youtube_id
from .website import WebsiteService, find_schema_recipe
from .description_parser import parse_description
from .llm_client import LLMService
from .ogp import OGPService, fetch_ogp, get_ogp_service

__all__ = [
    "VideoService",
    "extract_youtube_id",
    "WebsiteService",
    "find_schema_recipe",
    "parse_description",
    "LLMService",
    "OGPService",
    "fetch_ogp",
    "get_ogp_service",
]
