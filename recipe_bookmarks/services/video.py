"""YouTube URL classification and metadata fetching (oEmbed + Data API)."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse, parse_qs

import httpx

from recipe_bookmarks.config import Settings
from recipe_bookmarks.services.reporting import log_fetch_failure
from recipe_bookmarks.services.strategy import StrategyResult


YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com"}
SHORT_HOST = "youtu.be"

OEMBED_ENDPOINT = "https://www.youtube.com/oembed"
DATA_API_ENDPOINT = "https://www.googleapis.com/youtube/v3/videos"

# Best quality first
THUMBNAIL_PRECEDENCE = ("maxres", "high", "medium", "default")


@dataclass
class VideoMetadata:
    """Metadata extracted from YouTube."""
    title: str = ""
    description: str = ""
    thumbnail: Optional[str] = None
    uploader: str = ""

    @property
    def byline(self) -> Optional[str]:
        return f"by {self.uploader}" if self.uploader else None


def _text(value) -> Optional[str]:
    """Return ``value`` only when it is a string; JSON fields of any other type are dropped."""
    return value if isinstance(value, str) else None


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Recognizes youtube.com / www.youtube.com / m.youtube.com watch URLs
    (``v`` query parameter) and youtu.be short links (first path segment).
    Returns None for anything else, including unparseable input.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname or ""
    except ValueError:
        return None

    if hostname.startswith("m."):
        hostname = hostname[2:]

    if hostname in YOUTUBE_HOSTS:
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        return video_id or None

    if hostname == SHORT_HOST:
        video_id = parsed.path.lstrip("/").split("/")[0]
        return video_id or None

    return None


def canonical_youtube_url(video_id: str) -> str:
    """Normalize a YouTube video to a standard watch URL."""
    return f"https://www.youtube.com/watch?v={video_id}"


class VideoService:
    """Service for fetching YouTube video metadata."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.youtube_api_key
        self.timeout = settings.http_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def fetch_oembed(self, url: str) -> StrategyResult[VideoMetadata]:
        """Fetch title and thumbnail from the public oEmbed endpoint."""
        try:
            async with self._client() as client:
                response = await client.get(
                    OEMBED_ENDPOINT, params={"url": url, "format": "json"}
                )
                if response.status_code != 200:
                    log_fetch_failure(
                        url, "fetch_failed", f"oEmbed HTTP {response.status_code}",
                        feature="youtube_oembed",
                    )
                    return StrategyResult.failed("fetch_failed")
                data = response.json()
        except httpx.TimeoutException:
            log_fetch_failure(url, "fetch_timeout", "oEmbed timed out", feature="youtube_oembed")
            return StrategyResult.failed("fetch_timeout")
        except (httpx.HTTPError, ValueError) as e:
            log_fetch_failure(url, "fetch_failed", str(e), feature="youtube_oembed")
            return StrategyResult.failed("fetch_failed")

        if not isinstance(data, dict) or not isinstance(data.get("title", ""), str):
            log_fetch_failure(url, "invalid_response", "unexpected oEmbed shape", feature="youtube_oembed")
            return StrategyResult.failed("invalid_response")
        if not data.get("title"):
            return StrategyResult.failed("no_title")

        return StrategyResult.ok(VideoMetadata(
            title=data["title"],
            thumbnail=_text(data.get("thumbnail_url")) or None,
            uploader=_text(data.get("author_name")) or "",
        ))

    async def fetch_video_details(self, video_id: str) -> StrategyResult[VideoMetadata]:
        """
        Fetch the full snippet (title, description, channel, thumbnails)
        from the YouTube Data API.

        Needs YOUTUBE_API_KEY; without it the strategy is skipped with no
        network call.
        """
        if not self.api_key:
            return StrategyResult.failed("missing_credential")

        url = f"{DATA_API_ENDPOINT}?id={video_id}"
        try:
            async with self._client() as client:
                response = await client.get(
                    DATA_API_ENDPOINT,
                    params={"part": "snippet", "id": video_id, "key": self.api_key},
                )
                if response.status_code != 200:
                    log_fetch_failure(
                        url, "fetch_failed", f"Data API HTTP {response.status_code}",
                        feature="youtube_data_api",
                    )
                    return StrategyResult.failed("fetch_failed")
                data = response.json()
        except httpx.TimeoutException:
            log_fetch_failure(url, "fetch_timeout", "Data API timed out", feature="youtube_data_api")
            return StrategyResult.failed("fetch_timeout")
        except (httpx.HTTPError, ValueError) as e:
            log_fetch_failure(url, "fetch_failed", str(e), feature="youtube_data_api")
            return StrategyResult.failed("fetch_failed")

        items = data.get("items", []) if isinstance(data, dict) else None
        if not isinstance(items, list):
            log_fetch_failure(url, "invalid_response", "items is not a list", feature="youtube_data_api")
            return StrategyResult.failed("invalid_response")
        if not items:
            return StrategyResult.failed("not_found")

        snippet = items[0].get("snippet") if isinstance(items[0], dict) else None
        if not isinstance(snippet, dict) or not isinstance(snippet.get("title", ""), str):
            log_fetch_failure(url, "invalid_response", "unexpected snippet shape", feature="youtube_data_api")
            return StrategyResult.failed("invalid_response")
        if not snippet.get("title"):
            return StrategyResult.failed("no_title")

        return StrategyResult.ok(VideoMetadata(
            title=snippet["title"],
            description=_text(snippet.get("description")) or "",
            thumbnail=self._best_thumbnail(snippet.get("thumbnails")),
            uploader=_text(snippet.get("channelTitle")) or "",
        ))

    @staticmethod
    def _best_thumbnail(thumbnails) -> Optional[str]:
        """Pick the highest quality thumbnail that is present."""
        if not isinstance(thumbnails, dict):
            return None
        for quality in THUMBNAIL_PRECEDENCE:
            entry = thumbnails.get(quality)
            if isinstance(entry, dict) and _text(entry.get("url")):
                return entry["url"]
        return None
