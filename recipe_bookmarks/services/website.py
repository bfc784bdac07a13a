"""
Website metadata and recipe extraction service.

Pulls what a recipe bookmark needs out of an arbitrary page:
1. Open Graph / Dublin Core / Twitter-card metadata for the preview
2. JSON-LD structured data (Schema.org Recipe) for ingredients and steps
3. Cleaned page text, used as LLM input when there is no structured data
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

import extruct
import httpx
from bs4 import BeautifulSoup

from recipe_bookmarks.config import Settings
from recipe_bookmarks.models.recipe import RecipeSections
from recipe_bookmarks.services.reporting import log_fetch_failure
from recipe_bookmarks.services.strategy import StrategyResult


# Browser-like headers to avoid being blocked
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
    # Don't set Accept-Encoding manually - let httpx handle it with its defaults
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Upgrade-Insecure-Requests": "1",
}

# Elements that never hold recipe text
NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "iframe", "svg"]


@dataclass
class PageMetadata:
    """Link-preview candidates scraped from page meta tags."""
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


# ============================================================
# Structured data (JSON-LD)
# ============================================================

def _is_recipe_type(item_type: Any) -> bool:
    # Handle both string and list types
    if isinstance(item_type, list):
        return "Recipe" in item_type
    return item_type == "Recipe"


def _search_list(items: list) -> Optional[dict]:
    for item in items:
        found = _search_recipe_node(item)
        if found is not None:
            return found
    return None


def _search_recipe_node(raw: Any) -> Optional[dict]:
    """
    Depth-first search of one parsed JSON-LD value for a Recipe node.

    Variants, checked in order:
    - list: search each element, first match wins
    - Recipe object: the match itself
    - @graph container: search the graph entries
    - anything else: no match
    """
    if isinstance(raw, list):
        return _search_list(raw)
    if not isinstance(raw, dict):
        return None
    if _is_recipe_type(raw.get("@type")):
        return raw
    if isinstance(raw.get("@graph"), list):
        return _search_list(raw["@graph"])
    return None


def find_schema_recipe(html: str) -> Optional[dict]:
    """Return the first Schema.org Recipe found in the page's JSON-LD scripts."""
    soup = BeautifulSoup(html, "lxml")
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            raw = json.loads(script.get_text())
        except json.JSONDecodeError:
            continue
        found = _search_recipe_node(raw)
        if found is not None:
            return found
    return None


def _join_ingredients(raw: Any) -> Optional[str]:
    if not isinstance(raw, list):
        return None
    items = [item.strip() for item in raw if isinstance(item, str) and item.strip()]
    return "\n".join(items) if items else None


def _join_instructions(raw: Any) -> Optional[str]:
    """Accept a plain string, a list of strings, or a list of HowToStep objects."""
    if isinstance(raw, str):
        return raw or None

    if not isinstance(raw, list):
        return None

    steps = []
    for step in raw:
        if isinstance(step, dict):
            step = step.get("text")
        # Non-string entries (nested sections, nulls) carry no step text
        if isinstance(step, str) and step.strip():
            steps.append(step.strip())
    return "\n".join(steps) if steps else None


def recipe_fields_from_schema(recipe: dict) -> RecipeSections:
    """Convert a Schema.org Recipe node to newline-joined sections."""
    return RecipeSections(
        ingredients=_join_ingredients(recipe.get("recipeIngredient")),
        instructions=_join_instructions(recipe.get("recipeInstructions")),
    )


# ============================================================
# Page text for the LLM
# ============================================================

def extract_main_content(html: str, max_chars: int) -> str:
    """
    Reduce a page to plain text: noise elements removed, one line per
    element boundary, whitespace collapsed, capped at ``max_chars``.
    """
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(NOISE_TAGS):
        tag.decompose()

    lines = []
    for line in soup.get_text(separator="\n").splitlines():
        line = re.sub(r"\s+", " ", line).strip()
        if line:
            lines.append(line)
    return "\n".join(lines)[:max_chars]


# ============================================================
# Meta tags
# ============================================================

def _opengraph_properties(data: dict) -> dict:
    props = {}
    for item in data.get("opengraph", []):
        for key, value in item.get("properties", []):
            # First occurrence wins (og:image can repeat)
            props.setdefault(key, value)
    return props


def _dublincore_elements(data: dict) -> dict:
    elements = {}
    for item in data.get("dublincore", []):
        for element in item.get("elements", []):
            name = (element.get("name") or "").lower().rsplit(".", 1)[-1]
            content = element.get("content")
            if name and content:
                elements.setdefault(name, content)
    return elements


def _twitter_card(html: str) -> dict:
    soup = BeautifulSoup(html, "lxml")
    card = {}
    # Sites publish Twitter-card tags under either name= or property=
    for attr in ("name", "property"):
        for meta in soup.find_all("meta", attrs={attr: re.compile(r"^twitter:", re.I)}):
            content = meta.get("content")
            if content:
                card.setdefault(meta[attr].lower(), content)
    return card


def parse_page_metadata(html: str, url: str) -> PageMetadata:
    """Pick title/description/image: Open Graph first, then Dublin Core, then Twitter."""
    data = extruct.extract(
        html,
        base_url=url,
        syntaxes=["opengraph", "dublincore"],
        errors="log",
    )
    og = _opengraph_properties(data)
    dc = _dublincore_elements(data)
    twitter = _twitter_card(html)

    image = og.get("og:image") or twitter.get("twitter:image")
    return PageMetadata(
        title=og.get("og:title") or dc.get("title") or twitter.get("twitter:title"),
        description=og.get("og:description") or dc.get("description") or twitter.get("twitter:description"),
        image=urljoin(url, image) if image else None,
    )


class WebsiteService:
    """Service for fetching and reading third-party recipe pages."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = settings.http_timeout
        self._transport = transport

    @staticmethod
    def _headers_for(url: str) -> dict:
        # Add referer header based on domain
        parsed = urlparse(url)
        headers = HEADERS.copy()
        headers["Referer"] = f"{parsed.scheme}://{parsed.netloc}/"
        return headers

    async def _get_page(self, url: str, feature: str) -> StrategyResult[str]:
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers=self._headers_for(url))
                response.raise_for_status()
                return StrategyResult.ok(response.text)

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            error_type = {403: "fetch_403", 404: "fetch_404"}.get(status, "fetch_failed")
            log_fetch_failure(url, error_type, f"HTTP {status}", feature=feature)
            return StrategyResult.failed(error_type)

        except httpx.TimeoutException:
            log_fetch_failure(url, "fetch_timeout", "request timed out", feature=feature)
            return StrategyResult.failed("fetch_timeout")

        except httpx.HTTPError as e:
            log_fetch_failure(url, "fetch_failed", str(e), feature=feature)
            return StrategyResult.failed("fetch_failed")

    async def fetch_html(self, url: str) -> StrategyResult[str]:
        """Fetch raw HTML; failures come back as a reason, never raised."""
        result = await self._get_page(url, feature="page_fetch")
        if result.success:
            print(f"🌐 Fetched {len(result.value)} chars of HTML")
        return result

    async def scrape_metadata(self, url: str) -> StrategyResult[PageMetadata]:
        """Fetch the page and scrape its preview metadata."""
        page = await self._get_page(url, feature="metadata_scrape")
        if not page.success:
            return StrategyResult.failed(page.error_type)

        try:
            metadata = parse_page_metadata(page.value, url)
        except Exception as e:
            # extruct/lxml reject some documents outright (e.g. empty bodies)
            log_fetch_failure(url, "invalid_response", str(e), feature="metadata_scrape")
            return StrategyResult.failed("invalid_response")

        return StrategyResult.ok(metadata)
