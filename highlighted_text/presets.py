"""
Ready-made rule lists for common highlighting needs.

- URL_RULES: clickable ``http(s)://`` and ``www.`` links.
- MARKDOWN_RULES: headings, emphasis, code, links, quotes, lists, rules, tags.

Both lists are plain tuples of HighlightRule and can be concatenated with
host rules; order matters as for any rule list.
"""

import re
from typing import Final

from .model.attributed_text import TextRange
from .model.color import Color
from .model.enums import AttributeKey, FontTrait, LineStyle
from .model.font import FontDescriptor
from .model.rules import HighlightRule, TextDefaults, TextFormattingRule

# Heading size multipliers by level (# .. ######).
HEADING_SCALES: Final[dict[int, float]] = {1: 1.7, 2: 1.5, 3: 1.3, 4: 1.2, 5: 1.1, 6: 1.0}

_LINK_TARGET: Final = re.compile(r"\]\(([^()\s]*)\)$")

_secondary = TextFormattingRule.with_value(AttributeKey.FOREGROUND_COLOR, Color.SECONDARY_LABEL)


def link_target(matched: str, defaults: TextDefaults, match_range: TextRange) -> str:
    """Normalize a bare URL match into an absolute link target."""
    if "://" in matched:
        return matched
    return f"https://{matched}"


def heading_font(matched: str, defaults: TextDefaults, match_range: TextRange) -> FontDescriptor:
    """Scale the default font by heading level and make it bold."""
    level = len(matched) - len(matched.lstrip("#"))
    scale = HEADING_SCALES.get(level, 1.0)
    font = defaults.font.with_size(round(defaults.font.size * scale, 2))
    return font.with_traits(FontTrait.BOLD)


def markdown_link_target(matched: str, defaults: TextDefaults, match_range: TextRange) -> str:
    found = _LINK_TARGET.search(matched)
    return found.group(1) if found else ""


URL_PATTERN: Final[str] = r"(?<![\w/])(?:https?://|www\.)[^\s<>\"']*[^\s<>\"'.,;:!?)\]]"

URL_RULES: Final[tuple[HighlightRule, ...]] = (
    HighlightRule(
        URL_PATTERN,
        (
            TextFormattingRule.computed(AttributeKey.LINK, link_target),
            TextFormattingRule.with_value(AttributeKey.UNDERLINE_STYLE, LineStyle.SINGLE),
        ),
        re.IGNORECASE,
    ),
)

MARKDOWN_RULES: Final[tuple[HighlightRule, ...]] = (
    HighlightRule.single(
        r"^#{1,6}[ \t].*$",
        TextFormattingRule.computed(AttributeKey.FONT, heading_font),
        re.MULTILINE,
    ),
    HighlightRule.single(
        r"(\*{3}|_{3})(?=\S)(.+?)(?<=\S)\1",
        TextFormattingRule.with_traits(FontTrait.BOLD | FontTrait.ITALIC),
    ),
    HighlightRule.single(
        r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1",
        TextFormattingRule.with_traits(FontTrait.BOLD),
    ),
    HighlightRule.single(
        r"(?<![*\w])\*(?![\s*])(.+?)(?<![\s*])\*(?![*\w])",
        TextFormattingRule.with_traits(FontTrait.ITALIC),
    ),
    HighlightRule.single(
        r"(?<![_\w])_(?![\s_])(.+?)(?<![\s_])_(?![_\w])",
        TextFormattingRule.with_traits(FontTrait.ITALIC),
    ),
    HighlightRule.single(
        r"~~(?=\S)(.+?)(?<=\S)~~",
        TextFormattingRule.with_value(AttributeKey.STRIKETHROUGH_STYLE, LineStyle.SINGLE),
    ),
    HighlightRule(
        r"`[^`\n]+`",
        (TextFormattingRule.with_traits(FontTrait.MONO_SPACE), _secondary),
    ),
    HighlightRule(
        r"^```.*?^```[ \t]*$",
        (TextFormattingRule.with_traits(FontTrait.MONO_SPACE), _secondary),
        re.MULTILINE | re.DOTALL,
    ),
    HighlightRule(
        r"!?\[([^\[\]\n]*)\]\(([^()\s]*)\)",
        (TextFormattingRule.computed(AttributeKey.LINK, markdown_link_target), _secondary),
    ),
    HighlightRule(
        r"^>.*$",
        (TextFormattingRule.with_traits(FontTrait.ITALIC), _secondary),
        re.MULTILINE,
    ),
    HighlightRule.single(r"^[ \t]*(?:[-*+]|\d+\.)(?=[ \t])", _secondary, re.MULTILINE),
    HighlightRule.single(r"^(?:-{3,}|\*{3,}|_{3,})[ \t]*$", _secondary, re.MULTILINE),
    HighlightRule.single(r"</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>", _secondary),
)

__all__ = [
    "HEADING_SCALES",
    "URL_PATTERN",
    "URL_RULES",
    "MARKDOWN_RULES",
    "link_target",
    "heading_font",
    "markdown_link_target",
]
