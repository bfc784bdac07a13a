"""
Rule-based recipe section parser for free-text video descriptions.

Cooking channels write their recipes straight into the description, with
no consistent format. Two passes:

1. Header-based: lines like "【材料】(2人分)" / "作り方" / "Ingredients:" open
   sections, and a long separator rule or an SNS/channel-promo block closes
   the recipe part of the description.
2. Separator-based fallback, only when no header was found: a
   "今回のレシピはこちら" marker followed by two dashed rules. The block
   between the rules holds the ingredients as its first blank-line-delimited
   group and the steps as the remaining groups.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from recipe_bookmarks.models.recipe import RecipeSections


class SectionType(str, Enum):
    INGREDIENTS = "ingredients"
    INSTRUCTIONS = "instructions"
    END = "end"


@dataclass
class SectionMarker:
    """A header or end-of-recipe line found while scanning."""
    type: SectionType
    line_index: int


@dataclass
class ParsedDescription:
    """Recipe sections found in a description, plus the text before them."""
    ingredients: Optional[str] = None
    instructions: Optional[str] = None
    remaining_text: Optional[str] = None

    @property
    def sections(self) -> RecipeSections:
        return RecipeSections(ingredients=self.ingredients, instructions=self.instructions)


# ============================================================
# Patterns
# ============================================================

# Optional bullet/star run, then an optional opening bracket
_HEADER_PREFIX = r"^\s*(?:[・•●○◆◇■□★☆▼▽▶►※✅✔#*\-]+\s*)?[【\[［〔(（<＜〈《「『]?\s*"

# Optional closing bracket, servings note such as "（2人分）" or "2人分", colon
_HEADER_SUFFIX = (
    r"\s*[】\]］〕)）>＞〉》」』]?"
    r"\s*(?:[(（][^)）]*[)）]|\d+\s*(?:人分|人前|servings?))?"
    r"\s*[:：]?\s*$"
)

INGREDIENTS_HEADER = re.compile(
    _HEADER_PREFIX + r"(?:材料|食材|用意するもの|ingredients?)" + _HEADER_SUFFIX,
    re.IGNORECASE,
)

INSTRUCTIONS_HEADER = re.compile(
    _HEADER_PREFIX
    + r"(?:作り方|つくり方|作りかた|レシピ手順|調理手順|調理方法|手順"
    r"|instructions?|directions?|method|steps?|how\s+to\s+make)"
    + _HEADER_SUFFIX,
    re.IGNORECASE,
)

# Long separator rule, SNS / channel promo block, or a line of hashtags (not step numbers like #2)
RECIPE_END = re.compile(
    r"^\s*[-=＝―─━_~〜～*ー]{8,}\s*$"
    r"|^\s*[▼▽■□◆◇●○★☆▶►【\[<＜]*\s*"
    r"(?:sns|instagram|twitter|tiktok|facebook|公式line|line公式|x\s*[(（]旧"
    r"|チャンネル登録|お仕事|ご依頼|bgm|使用音源|関連動画|おすすめ動画|ブログ|blog)"
    r"|^\s*#\S*[^\d\s]\S*(?:\s+#\S*[^\d\s]\S*)*\s*$",
    re.IGNORECASE,
)

RECIPE_MARKER = re.compile(
    r"(?:今回の)?レシピはこちら|レシピは(?:下記|以下)|today'?s\s+recipe|recipe\s+(?:is\s+)?below",
    re.IGNORECASE,
)

RULE_LINE = re.compile(r"^\s*[-－—―─━]{4,}\s*$")


# ============================================================
# Helpers
# ============================================================

def _clean_block(lines: list[str]) -> Optional[str]:
    """Trim lines, drop blanks, join with newlines; None when nothing is left."""
    kept = [line.strip() for line in lines if line.strip()]
    return "\n".join(kept) if kept else None


def _split_groups(lines: list[str]) -> list[list[str]]:
    """Split lines into blank-line-delimited groups of trimmed lines."""
    groups = []
    current = []
    for line in lines:
        if line.strip():
            current.append(line.strip())
        elif current:
            groups.append(current)
            current = []
    if current:
        groups.append(current)
    return groups


def find_section_markers(lines: list[str]) -> list[SectionMarker]:
    """
    Scan lines for section headers in order.

    The end-of-recipe boundary only counts once a section has opened, and
    scanning stops there.
    """
    markers = []
    for index, line in enumerate(lines):
        if INGREDIENTS_HEADER.match(line):
            markers.append(SectionMarker(SectionType.INGREDIENTS, index))
        elif INSTRUCTIONS_HEADER.match(line):
            markers.append(SectionMarker(SectionType.INSTRUCTIONS, index))
        elif markers and RECIPE_END.match(line):
            markers.append(SectionMarker(SectionType.END, index))
            break
    return markers


def _parse_by_headers(lines: list[str], markers: list[SectionMarker]) -> ParsedDescription:
    contents = {SectionType.INGREDIENTS: [], SectionType.INSTRUCTIONS: []}

    for position, marker in enumerate(markers):
        if marker.type == SectionType.END:
            continue
        if position + 1 < len(markers):
            stop = markers[position + 1].line_index
        else:
            stop = len(lines)
        # Repeated headers of the same type are concatenated in order
        contents[marker.type].extend(lines[marker.line_index + 1:stop])

    return ParsedDescription(
        ingredients=_clean_block(contents[SectionType.INGREDIENTS]),
        instructions=_clean_block(contents[SectionType.INSTRUCTIONS]),
        remaining_text=_clean_block(lines[:markers[0].line_index]),
    )


def _parse_by_separators(lines: list[str]) -> ParsedDescription:
    marker_index = next(
        (i for i, line in enumerate(lines) if RECIPE_MARKER.search(line)),
        None,
    )
    if marker_index is None:
        return ParsedDescription()

    rules = [
        i for i in range(marker_index + 1, len(lines))
        if RULE_LINE.match(lines[i])
    ][:2]
    if len(rules) < 2:
        return ParsedDescription()

    groups = _split_groups(lines[rules[0] + 1:rules[1]])
    ingredients = "\n".join(groups[0]) if groups else None
    instructions = "\n".join(line for group in groups[1:] for line in group) or None

    return ParsedDescription(
        ingredients=ingredients,
        instructions=instructions,
        remaining_text=_clean_block(lines[:marker_index]),
    )


def parse_description(text: Optional[str]) -> ParsedDescription:
    """Locate ingredients and instructions in a free-text description."""
    if not text:
        return ParsedDescription()

    lines = text.splitlines()
    markers = find_section_markers(lines)
    if markers:
        return _parse_by_headers(lines, markers)
    return _parse_by_separators(lines)
