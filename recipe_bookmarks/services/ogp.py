"""
Recipe link preview orchestrator.

Turns an arbitrary URL into an OGPData preview (title, description, image)
plus best-effort ingredients and instructions:

- YouTube: Data API snippet (falls back to oEmbed), then recipe sections from
  the video description via the LLM, with the rule-based parser filling
  anything the LLM left empty.
- Other pages: meta-tag scrape and HTML fetch run concurrently, then
  JSON-LD Recipe data, with the LLM on the page text only when the page has
  no structured recipe.

Every upstream failure degrades the result; nothing is raised to the caller.
"""

import asyncio
from functools import lru_cache
from typing import Optional

import sentry_sdk
from pydantic import HttpUrl, TypeAdapter, ValidationError

from recipe_bookmarks.config import Settings, get_settings
from recipe_bookmarks.models.recipe import RecipeSections
from recipe_bookmarks.models.schemas import OGPData
from recipe_bookmarks.services.description_parser import parse_description
from recipe_bookmarks.services.llm_client import LLMService
from recipe_bookmarks.services.reporting import get_domain
from recipe_bookmarks.services.strategy import StrategyResult, first_success
from recipe_bookmarks.services.video import (
    VideoMetadata,
    VideoService,
    canonical_youtube_url,
    extract_youtube_id,
)
from recipe_bookmarks.services.website import (
    PageMetadata,
    WebsiteService,
    extract_main_content,
    find_schema_recipe,
    recipe_fields_from_schema,
)

DEFAULT_TITLE = "no title"

_URL_ADAPTER = TypeAdapter(HttpUrl)


def validate_url(url) -> Optional[str]:
    """Return the stripped URL if it is a valid absolute http(s) URL."""
    if not isinstance(url, str):
        return None
    url = url.strip()
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return None
    return url


class OGPService:
    """Main extraction orchestrator for recipe bookmarks."""

    def __init__(
        self,
        settings: Settings,
        video: Optional[VideoService] = None,
        website: Optional[WebsiteService] = None,
        llm: Optional[LLMService] = None,
    ):
        self.settings = settings
        self.video = video or VideoService(settings)
        self.website = website or WebsiteService(settings)
        self.llm = llm or LLMService(settings)

    async def fetch_ogp(self, url: str) -> Optional[OGPData]:
        """
        Extract preview metadata and recipe sections for ``url``.

        Returns None only for an invalid URL or an unexpected internal error.
        """
        validated_url = validate_url(url)
        if validated_url is None:
            print(f"⚠️ Rejected invalid URL: {url!r}")
            return None

        try:
            video_id = extract_youtube_id(validated_url)
            if video_id:
                print(f"🎬 YouTube video detected: {video_id}")
                ogp_data = await self._fetch_youtube(video_id)
                if ogp_data:
                    return ogp_data
                print("⚠️ No YouTube metadata, falling back to page scrape")

            return await self._fetch_website(validated_url)

        except Exception as e:
            print(f"❌ OGP extraction error: {e}")
            sentry_sdk.capture_exception(e)
            return None

    # ------------------------------------------------------------
    # YouTube
    # ------------------------------------------------------------

    async def _fetch_youtube(self, video_id: str) -> Optional[OGPData]:
        canonical_url = canonical_youtube_url(video_id)

        metadata_result: StrategyResult[VideoMetadata] = await first_success([
            lambda: self.video.fetch_video_details(video_id),
            lambda: self.video.fetch_oembed(canonical_url),
        ])
        if not metadata_result.success:
            return None

        metadata = metadata_result.value
        sections = RecipeSections()
        # oEmbed carries no description, so recipe fields only come with the Data API
        if metadata.description:
            sections = await self._sections_from_description(metadata.description)

        return OGPData(
            title=metadata.title or DEFAULT_TITLE,
            description=metadata.byline,
            image=metadata.thumbnail,
            url=canonical_url,
            ingredients=sections.ingredients,
            instructions=sections.instructions,
        )

    async def _sections_from_description(self, description: str) -> RecipeSections:
        parsed = parse_description(description)
        if not parsed.sections.is_empty:
            print("📋 Rule-based parser found recipe sections in description")

        # YouTube pages never carry JSON-LD, so the LLM always gets a look
        capped = description[:self.settings.youtube_description_max_chars]
        llm_result = await self.llm.extract_sections(capped)
        if llm_result.success:
            return llm_result.value.or_else(parsed.sections)
        return parsed.sections

    # ------------------------------------------------------------
    # Other websites
    # ------------------------------------------------------------

    async def _fetch_website(self, url: str) -> OGPData:
        print(f"🌐 Fetching page metadata and HTML for {get_domain(url)}")
        metadata_result, html_result = await asyncio.gather(
            self._isolated(self.website.scrape_metadata(url)),
            self._isolated(self.website.fetch_html(url)),
        )
        metadata = metadata_result.value or PageMetadata()

        sections = RecipeSections()
        html = html_result.value
        if html:
            sections_result: StrategyResult[RecipeSections] = await first_success([
                lambda: self._isolated(self._structured_sections(html), "invalid_response"),
                lambda: self._isolated(self._llm_sections(html), "invalid_response"),
            ])
            if sections_result.success:
                sections = sections_result.value

        return OGPData(
            title=metadata.title or DEFAULT_TITLE,
            description=metadata.description,
            image=metadata.image,
            url=url,
            ingredients=sections.ingredients,
            instructions=sections.instructions,
        )

    @staticmethod
    async def _isolated(coro, error_type: str = "fetch_failed") -> StrategyResult:
        """Await a fetch, turning an unexpected exception into a failed result."""
        try:
            return await coro
        except Exception as e:
            print(f"❌ Extraction step crashed: {e}")
            sentry_sdk.capture_exception(e)
            return StrategyResult.failed(error_type)

    async def _structured_sections(self, html: str) -> StrategyResult[RecipeSections]:
        recipe = find_schema_recipe(html)
        if recipe is None:
            print("⚠️ No JSON-LD recipe found")
            return StrategyResult.failed("no_recipe")
        print("✅ Found JSON-LD recipe schema")
        return StrategyResult.ok(recipe_fields_from_schema(recipe))

    async def _llm_sections(self, html: str) -> StrategyResult[RecipeSections]:
        content = extract_main_content(html, self.settings.llm_max_input_chars)
        print(f"📄 Extracted {len(content)} chars of page text for the LLM")
        return await self.llm.extract_sections(content)


@lru_cache
def get_ogp_service() -> OGPService:
    """Get the shared orchestrator built from process settings."""
    return OGPService(get_settings())


async def fetch_ogp(url: str) -> Optional[OGPData]:
    """Extract a recipe link preview using the shared orchestrator."""
    return await get_ogp_service().fetch_ogp(url)
