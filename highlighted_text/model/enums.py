"""
model/enums.py

Domain enums for the highlighting model: symbolic font traits and the
well-known attribute keys understood by host renderers.

NO matching or rendering logic here!

- FontTrait is a Flag: traits compose with ``|`` and union is idempotent.
- AttributeKey members are plain strings, so any other string is a valid
  custom key and compares equal to the member with the same value.
"""

from __future__ import annotations

import logging
from enum import Enum, Flag, auto
from typing import Final, Iterable, List, Literal

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class FontTrait(Flag):
    BOLD = auto()
    ITALIC = auto()
    EXPANDED = auto()
    CONDENSED = auto()
    MONO_SPACE = auto()
    VERTICAL = auto()
    TIGHT_LEADING = auto()
    LOOSE_LEADING = auto()

    @classmethod
    def none(cls) -> "FontTrait":
        return cls(0)

    @classmethod
    def combine(cls, traits: Iterable["FontTrait"]) -> "FontTrait":
        result = cls(0)
        for trait in traits:
            result |= trait
        return result

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FontTrait":
        result = cls(0)
        for name in names:
            try:
                result |= cls[name.strip().upper()]
            except KeyError:
                _logger.error("Unknown font trait: %r", name)
                raise ValueError(f"Unknown font trait: {name!r}") from None
        return result

    def names(self) -> List[str]:
        """Member names contained in this flag value, in declaration order."""
        return [member.name for member in type(self) if member.name and member in self]

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        return "|".join(self.names()) if self else "none"


class AttributeKey(str, Enum):
    FONT = "font"
    FOREGROUND_COLOR = "color"
    BACKGROUND_COLOR = "background_color"
    UNDERLINE_STYLE = "underline_style"
    STRIKETHROUGH_STYLE = "strikethrough_style"
    LINK = "link"
    KERN = "kern"
    TOOLTIP = "tooltip"

    def __str__(self) -> str:
        return self.value

    @property
    def is_font(self) -> bool:
        return self is AttributeKey.FONT


class LineStyle(int, Enum):
    """Values for the underline and strikethrough attributes."""

    NONE = 0
    SINGLE = 1
    THICK = 2
    DOUBLE = 9


# === DEFAULTS ===
DEFAULT_FONT_FAMILY: Final[str] = "system-ui"
DEFAULT_FONT_SIZE: Final[float] = 13.0
DEFAULT_TEXT_COLOR: Final[str] = "#000000"


def normalize_key(key: "str | AttributeKey") -> str:
    """Return the plain string form of an attribute key."""
    if isinstance(key, AttributeKey):
        return key.value
    if not isinstance(key, str):
        raise TypeError(f"Attribute key must be str, got {type(key).__name__}")
    if not key:
        raise ValueError("Attribute key cannot be empty")
    return key


__all__ = [
    "FontTrait",
    "AttributeKey",
    "LineStyle",
    "DEFAULT_FONT_FAMILY",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_TEXT_COLOR",
    "normalize_key",
]
