"""
Pytest configuration and fixtures for the recipe bookmarks tests.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from recipe_bookmarks.config import Settings


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values = {
        "youtube_api_key": None,
        "openai_api_key": None,
        "sentry_dsn": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_chat_completion(content) -> MagicMock:
    """Build a mock ChatCompletion response."""
    if not isinstance(content, str):
        content = json.dumps(content, ensure_ascii=False)
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def settings():
    """Settings with no optional credentials configured."""
    return make_settings()


@pytest.fixture
def mock_openai():
    """Mock AsyncOpenAI client."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=make_chat_completion({"ingredients": "", "instructions": ""})
    )
    return client


@pytest.fixture
def recipe_page_html():
    """A recipe blog page with Open Graph tags and JSON-LD."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Pancakes | Blog</title>
  <meta property="og:title" content="Fluffy Pancakes">
  <meta property="og:description" content="Weekend breakfast classic">
  <meta property="og:image" content="/images/pancakes.jpg">
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Recipe", "name": "Fluffy Pancakes",
   "recipeIngredient": ["200g flour", "2 eggs", "300ml milk"],
   "recipeInstructions": [
     {"@type": "HowToStep", "text": "Whisk everything together."},
     {"@type": "HowToStep", "text": "Cook on a hot griddle."}
   ]}
  </script>
</head>
<body><h1>Fluffy Pancakes</h1></body>
</html>"""
