"""Value types and configuration objects for the highlighting engine."""

from .attributed_text import AttributedText, AttributeRun, TextRange
from .color import Color
from .enums import AttributeKey, FontTrait, LineStyle
from .font import FontDescriptor
from .rules import HighlightRule, TextDefaults, TextFormattingRule

__all__ = [
    "AttributedText",
    "AttributeRun",
    "TextRange",
    "Color",
    "AttributeKey",
    "FontTrait",
    "LineStyle",
    "FontDescriptor",
    "HighlightRule",
    "TextDefaults",
    "TextFormattingRule",
]
