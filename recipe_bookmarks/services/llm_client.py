"""LLM fallback for recipe section extraction (OpenAI, JSON mode)."""

import json
from typing import Any, Optional

from openai import AsyncOpenAI

from recipe_bookmarks.config import Settings
from recipe_bookmarks.models.recipe import RecipeSections
from recipe_bookmarks.services.prompts import (
    SECTION_EXTRACTION_SYSTEM_PROMPT,
    get_section_extraction_prompt,
)
from recipe_bookmarks.services.strategy import StrategyResult


def _as_text(value: Any) -> str:
    """Normalize a model field (string or list of strings) to trimmed text."""
    if isinstance(value, list):
        value = "\n".join(str(item).strip() for item in value if str(item).strip())
    if not isinstance(value, str):
        return ""
    return value.strip()


class LLMService:
    """
    Service for LLM-based extraction of ingredients and instructions.

    Used only when structured extraction has nothing to offer. The model is
    told to echo text literally; it must never fill gaps on its own.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.model = settings.llm_model
        self.max_input_chars = settings.llm_max_input_chars
        if client is None and settings.openai_api_key:
            client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.llm_timeout,
                max_retries=0,
            )
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def extract_sections(self, content: str) -> StrategyResult[RecipeSections]:
        """
        Ask the model for the ingredients and instructions in ``content``.

        Returns a failed result when no credential is configured, when the
        call or the JSON parse fails, or when the model found nothing.
        """
        if not self.enabled:
            return StrategyResult.failed("missing_credential")

        content = content[:self.max_input_chars]
        if not content.strip():
            return StrategyResult.failed("no_recipe")

        print(f"🤖 Extracting recipe sections with {self.model} ({len(content)} chars)...")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SECTION_EXTRACTION_SYSTEM_PROMPT},
                    {"role": "user", "content": get_section_extraction_prompt(content)},
                ],
                response_format={"type": "json_object"},
                temperature=0,
                max_tokens=2000,
            )
            response_text = response.choices[0].message.content
            data = json.loads(response_text or "")
        except json.JSONDecodeError as e:
            print(f"❌ Failed to parse LLM response as JSON: {e}")
            return StrategyResult.failed("invalid_response")
        except Exception as e:
            print(f"❌ LLM extraction failed: {e}")
            return StrategyResult.failed("llm_failed")

        if not isinstance(data, dict):
            return StrategyResult.failed("invalid_response")

        sections = RecipeSections(
            ingredients=_as_text(data.get("ingredients")) or None,
            instructions=_as_text(data.get("instructions")) or None,
        )
        if sections.is_empty:
            print("⚠️ LLM found no recipe sections")
            return StrategyResult.failed("no_recipe")

        print("✅ LLM extracted recipe sections")
        return StrategyResult.ok(sections)
